"""Walk the filesystem and build a tree of entries with aggregated sizes."""

from __future__ import annotations

import os
import queue
import stat
import threading
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

_THROTTLE_INTERVAL = 0.25
_QUEUE_SIZE = 100
_POLL_INTERVAL = 0.05
_BLOCK_SIZE = 512


@dataclass
class EntryData:
    """One file or directory; a directory's size is the sum of its children."""

    name: str = ""
    size: int = 0
    mtime: float = 0.0
    entry_count: int | None = None
    metadata_io_error: bool = False
    is_dir: bool = False


class Tree:
    """A directed tree of EntryData nodes addressed by stable integer indices."""

    def __init__(self) -> None:
        self._nodes: dict[int, EntryData] = {}
        self._children: dict[int, list[int]] = {}
        self._parents: dict[int, int] = {}
        self._next_index = 0

    def _check(self, index: int) -> None:
        if index not in self._nodes:
            raise KeyError(f"no node with index {index}")

    def add_node(self, data: EntryData) -> int:
        """Add a node and return its index."""
        index = self._next_index
        self._next_index += 1
        self._nodes[index] = data
        self._children[index] = []
        return index

    def add_edge(self, parent: int, child: int) -> None:
        """Make ``child`` a child of ``parent``."""
        self._check(parent)
        self._check(child)
        self._children[parent].append(child)
        self._parents[child] = parent

    def children(self, index: int) -> list[int]:
        """Return the indices of the children of ``index``."""
        self._check(index)
        return list(self._children[index])

    def parent(self, index: int) -> int | None:
        """Return the parent index of ``index``, or None for a top node."""
        self._check(index)
        return self._parents.get(index)

    def __getitem__(self, index: int) -> EntryData:
        self._check(index)
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)


class Traversal:
    """The result of a filesystem traversal: a tree and its top node."""

    def __init__(self) -> None:
        self.tree = Tree()
        self.root_index = self.tree.add_node(EntryData())

    def recompute_node_size(self, index: int) -> int:
        """Return the sum of the sizes of the children of ``index``."""
        return sum(self.tree[child].size for child in self.tree.children(index))


@dataclass
class TraversalStats:
    """Counters collected while traversing."""

    entries_traversed: int = 0
    start: float = field(default_factory=time.monotonic)
    elapsed: float | None = None
    io_errors: int = 0
    total_bytes: int | None = None


@dataclass
class EntryInfo:
    """Size and entry count accumulated for a directory."""

    size: int = 0
    entries_count: int | None = None

    def add_count(self, other: EntryInfo) -> None:
        """Add the other entry count to this one, treating a missing count as absent."""
        if other.entries_count is None:
            return
        self.entries_count = (self.entries_count or 0) + other.entries_count


@dataclass(frozen=True)
class WalkOptions:
    """Options controlling how the filesystem is walked and sizes are counted."""

    threads: int = 0
    apparent_size: bool = False
    count_hard_links: bool = False
    sorted_by_name: bool = False
    cross_filesystems: bool = True
    ignore_dirs: tuple[Path, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ignore_dirs", tuple(Path(p) for p in self.ignore_dirs))


@dataclass(frozen=True)
class WalkEntry:
    """An entry produced by a walk, with its depth below the walk root."""

    depth: int
    file_name: str
    parent_path: Path
    metadata: os.stat_result | OSError | None


@dataclass(frozen=True)
class EntryEvent:
    """A walk entry, or the error met while reading a directory."""

    entry: WalkEntry | OSError
    root_path: Path
    device_id: int


@dataclass(frozen=True)
class FinishedEvent:
    """The walk is complete; carries errors met outside the walk itself."""

    io_errors: int


def size_on_disk(path: str | os.PathLike[str], meta: os.stat_result) -> int:
    """Return the space an entry occupies on disk."""
    blocks = getattr(meta, "st_blocks", None)
    if blocks is not None:
        return blocks * _BLOCK_SIZE
    return os.path.getsize(path)


def _read_dir(path: Path, sort: bool) -> list[os.DirEntry[str]]:
    with os.scandir(path) as it:
        entries = list(it)
    if sort:
        entries.sort(key=lambda e: e.name)
    return entries


def walk(
    root: str | os.PathLike[str],
    device_id: int,
    options: WalkOptions,
    skip_root: bool,
) -> Iterator[WalkEntry | OSError]:
    """Walk ``root`` depth-first without following symlinks.

    Directories on other devices are not entered unless ``cross_filesystems``
    is set, and directories in ``ignore_dirs`` are listed but not entered.
    """
    root = Path(root)
    ignored = {os.path.abspath(p) for p in options.ignore_dirs}
    try:
        root_meta = os.lstat(root)
    except OSError as error:
        yield error
        return
    if not skip_root:
        yield WalkEntry(0, root.name or str(root), root.parent, root_meta)
    if not stat.S_ISDIR(root_meta.st_mode):
        return

    stack: list[tuple[Iterator[os.DirEntry[str]], Path, int]] = []
    try:
        stack.append((iter(_read_dir(root, options.sorted_by_name)), root, 1))
    except OSError as error:
        yield error

    while stack:
        entries, parent, depth = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue
        meta: os.stat_result | OSError
        try:
            meta = entry.stat(follow_symlinks=False)
        except OSError as error:
            meta = error
        yield WalkEntry(depth, entry.name, parent, meta)
        if not isinstance(meta, os.stat_result) or not stat.S_ISDIR(meta.st_mode):
            continue
        if not options.cross_filesystems and meta.st_dev != device_id:
            continue
        if os.path.abspath(entry.path) in ignored:
            continue
        child = Path(entry.path)
        try:
            stack.append((iter(_read_dir(child, options.sorted_by_name)), child, depth + 1))
        except OSError as error:
            yield error


class _Throttle:
    def __init__(self, interval: float) -> None:
        self._interval = interval
        self._next = time.monotonic() + interval

    def can_update(self) -> bool:
        now = time.monotonic()
        if now < self._next:
            return False
        self._next = now + self._interval
        return True


class _InodeFilter:
    def __init__(self) -> None:
        self._seen: set[tuple[int, int]] = set()

    def add(self, meta: os.stat_result) -> bool:
        """Return True the first time a hard-linked inode is seen."""
        if meta.st_nlink <= 1:
            return True
        key = (meta.st_dev, meta.st_ino)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True


class BackgroundTraversal:
    """Walk the inputs on a background thread and fold the results into a Traversal."""

    def __init__(
        self,
        root_index: int,
        walk_options: WalkOptions,
        inputs: Iterable[str | os.PathLike[str]],
        skip_root: bool,
        use_root_path: bool,
    ) -> None:
        self.root_index = root_index
        self.stats = TraversalStats()
        self._walk_options = walk_options
        self._inputs = [Path(p) for p in inputs]
        self._skip_root = skip_root
        self._use_root_path = use_root_path
        self._previous_index = root_index
        self._parent_index = root_index
        self._info_per_depth: list[EntryInfo] = []
        self._current = EntryInfo()
        self._previous_depth = 0
        self._inodes = _InodeFilter()
        self._throttle: _Throttle | None = _Throttle(_THROTTLE_INTERVAL)
        self._queue: queue.Queue[EntryEvent | FinishedEvent] = queue.Queue(_QUEUE_SIZE)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> BackgroundTraversal:
        """Start the walking thread."""
        if self._thread is not None:
            raise RuntimeError("traversal already started")
        self._thread = threading.Thread(
            target=self._run, name="duview-fs-walk-dispatcher", daemon=True
        )
        self._thread.start()
        return self

    def stop(self) -> None:
        """Ask the walking thread to stop as soon as possible."""
        self._stop.set()

    def events(self) -> Iterator[EntryEvent | FinishedEvent]:
        """Yield events as the thread produces them, ending after the FinishedEvent."""
        while True:
            try:
                event = self._queue.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                if self._thread is not None and self._thread.is_alive():
                    continue
                try:
                    event = self._queue.get_nowait()
                except queue.Empty:
                    return
            yield event
            if isinstance(event, FinishedEvent):
                return

    def _put(self, event: EntryEvent | FinishedEvent) -> bool:
        while not self._stop.is_set():
            try:
                self._queue.put(event, timeout=_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def _run(self) -> None:
        io_errors = 0
        for root in self._inputs:
            try:
                device_id = os.stat(root).st_dev
            except OSError:
                io_errors += 1
                continue
            for entry in walk(root, device_id, self._walk_options, self._skip_root):
                if not self._put(EntryEvent(entry, root, device_id)):
                    return
        self._put(FinishedEvent(io_errors))

    def _set_info(self, traversal: Traversal, index: int, info: EntryInfo) -> None:
        node = traversal.tree[index]
        node.size = info.size
        node.entry_count = info.entries_count

    def _pop_info(self) -> EntryInfo:
        if not self._info_per_depth:
            raise RuntimeError("directory levels out of sync with the tree")
        return self._info_per_depth.pop()

    def _parent_of(self, traversal: Traversal, index: int) -> int:
        parent = traversal.tree.parent(index)
        if parent is None:
            raise RuntimeError(f"node {index} has no parent")
        return parent

    def integrate(
        self, traversal: Traversal, event: EntryEvent | FinishedEvent
    ) -> bool | None:
        """Fold ``event`` into ``traversal``.

        Returns True when the traversal is finished, False when the caller may
        refresh its display, and None otherwise.
        """
        if isinstance(event, FinishedEvent):
            return self._finish(traversal, event)

        self.stats.entries_traversed += 1
        data = EntryData()
        entry = event.entry
        if isinstance(entry, WalkEntry):
            self._integrate_entry(traversal, entry, event, data)
        else:
            if self._previous_depth == 0:
                data.name = str(event.root_path)
                index = traversal.tree.add_node(data)
                traversal.tree.add_edge(self._parent_index, index)
            self.stats.io_errors += 1

        if self._throttle is not None and self._throttle.can_update():
            return False
        return None

    def _integrate_entry(
        self,
        traversal: Traversal,
        entry: WalkEntry,
        event: EntryEvent,
        data: EntryData,
    ) -> None:
        options = self._walk_options
        depth = entry.depth
        if self._skip_root:
            depth -= 1
            data.name = entry.file_name
        elif depth < 1 and self._use_root_path:
            data.name = str(event.root_path)
        else:
            data.name = entry.file_name

        file_size = 0
        file_count = 0
        mtime = 0.0
        meta = entry.metadata
        if isinstance(meta, os.stat_result):
            if (
                not stat.S_ISDIR(meta.st_mode)
                and (options.count_hard_links or self._inodes.add(meta))
                and (options.cross_filesystems or meta.st_dev == event.device_id)
            ):
                file_count = 1
                if options.apparent_size:
                    file_size = meta.st_size
                else:
                    try:
                        file_size = size_on_disk(
                            Path(entry.parent_path) / entry.file_name, meta
                        )
                    except OSError:
                        self.stats.io_errors += 1
                        data.metadata_io_error = True
                        file_size = 0
            else:
                data.entry_count = 0
                data.is_dir = True
            mtime = float(meta.st_mtime)
        elif isinstance(meta, OSError):
            self.stats.io_errors += 1
            data.metadata_io_error = True

        if depth > self._previous_depth:
            self._info_per_depth.append(self._current)
            self._current = EntryInfo(file_size, file_count)
            self._parent_index = self._previous_index
        elif depth < self._previous_depth:
            for _ in range(self._previous_depth - depth):
                self._set_info(traversal, self._parent_index, self._current)
                dir_info = self._pop_info()
                self._current.size += dir_info.size
                self._current.add_count(dir_info)
                self._parent_index = self._parent_of(traversal, self._parent_index)
            self._current.size += file_size
            self._current.entries_count = (self._current.entries_count or 0) + file_count
            self._set_info(traversal, self._parent_index, self._current)
        else:
            self._current.size += file_size
            self._current.entries_count = (self._current.entries_count or 0) + file_count

        data.mtime = mtime
        data.size = file_size
        index = traversal.tree.add_node(data)
        traversal.tree.add_edge(self._parent_index, index)
        self._previous_index = index
        self._previous_depth = depth

    def _finish(self, traversal: Traversal, event: FinishedEvent) -> bool:
        self.stats.io_errors += event.io_errors
        self._throttle = None
        self._info_per_depth.append(self._current)
        self._current = EntryInfo()
        for _ in range(self._previous_depth):
            dir_info = self._pop_info()
            self._current.size += dir_info.size
            self._current.add_count(dir_info)
            self._set_info(traversal, self._parent_index, self._current)
            self._parent_index = self._parent_of(traversal, self._parent_index)

        root_size = traversal.recompute_node_size(self.root_index)
        traversed = self.stats.entries_traversed
        self._set_info(
            traversal,
            self.root_index,
            EntryInfo(root_size, traversed if traversed > 0 else None),
        )
        self.stats.total_bytes = root_size
        self.stats.elapsed = time.monotonic() - self.stats.start
        return True