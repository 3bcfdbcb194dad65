"""Command-line options and the choice of input paths."""

from __future__ import annotations

import argparse
import enum
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from duview.tree import WalkOptions

_SUBCOMMANDS = {
    "aggregate": "aggregate",
    "a": "aggregate",
    "interactive": "interactive",
    "i": "interactive",
}
_VALUE_OPTIONS = frozenset({"-t", "--threads", "-f", "--format", "-i", "--ignore-dirs", "--log-file"})
_LINUX_IGNORE_DIRS = ("/proc", "/dev", "/sys", "/run")
_MACOS_THREADS = 3


class ByteFormat(enum.Enum):
    """The format with which byte counts are printed."""

    METRIC = "metric"
    BINARY = "binary"
    BYTES = "bytes"
    GB = "gb"
    GIB = "gib"
    MB = "mb"
    MIB = "mib"

    @classmethod
    def parse(cls, text: str) -> ByteFormat:
        """Parse a format name, ignoring case."""
        try:
            return cls(text.lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise argparse.ArgumentTypeError(
                f"invalid format {text!r} (choose from {choices})"
            ) from None


def _is_macos() -> bool:
    return sys.platform == "darwin"


def _default_format() -> ByteFormat:
    return ByteFormat.METRIC if _is_macos() else ByteFormat.BINARY


def _default_threads() -> int:
    return _MACOS_THREADS if _is_macos() else 0


def _default_ignore_dirs() -> list[Path]:
    if sys.platform.startswith("linux"):
        return [Path(p) for p in _LINUX_IGNORE_DIRS]
    return []


def _non_negative(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"number must not be negative: {value}")
    return value


def _main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duview",
        description="A tool to learn about disk usage, fast!",
        usage="duview [FLAGS] [OPTIONS] [SUBCOMMAND] [INPUT]...",
        epilog="Subcommands: aggregate (a), interactive (i).",
    )
    parser.add_argument(
        "-t",
        "--threads",
        type=_non_negative,
        default=_default_threads(),
        help="The amount of threads to use; 0 means the amount of logical processors.",
    )
    parser.add_argument(
        "-f",
        "--format",
        type=ByteFormat.parse,
        default=_default_format(),
        help="The format with which to print byte counts.",
    )
    parser.add_argument(
        "-A", "--apparent-size", action="store_true", help="Display apparent size instead of disk usage."
    )
    parser.add_argument(
        "-l",
        "--count-hard-links",
        action="store_true",
        help="Count hard-linked files each time they are seen.",
    )
    parser.add_argument(
        "-x",
        "--stay-on-filesystem",
        action="store_true",
        help="Do not cross filesystems or traverse mount points.",
    )
    parser.add_argument(
        "-i",
        "--ignore-dirs",
        type=Path,
        action="append",
        default=None,
        help="Absolute directories to ignore when reached during traversal.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write a log file with debug information.")
    parser.add_argument("input", nargs="*", type=Path, help="Input files or directories.")
    return parser


def _aggregate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duview aggregate",
        description="Aggregate the consumed space of one or more directories or files.",
    )
    parser.add_argument(
        "--stats",
        dest="statistics",
        action="store_true",
        help="Print additional statistics about the traversal to stderr.",
    )
    parser.add_argument(
        "--no-sort", action="store_true", help="Print paths in command-line order instead of by size."
    )
    parser.add_argument(
        "--no-total", action="store_true", help="Do not compute a total for multiple inputs."
    )
    parser.add_argument("input", nargs="*", type=Path, help="Input files or directories.")
    return parser


def _interactive_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duview interactive", description="Launch the terminal user interface."
    )
    parser.add_argument(
        "-e",
        "--no-entry-check",
        action="store_true",
        help="Do not check entries for presence when listing a directory.",
    )
    parser.add_argument("input", nargs="*", type=Path, help="Input files or directories.")
    return parser


def _subcommand_position(argv: Sequence[str]) -> int | None:
    position = 0
    while position < len(argv):
        token = argv[position]
        if token == "--":
            return None
        if token.startswith("-") and len(token) > 1:
            position += 2 if token in _VALUE_OPTIONS else 1
            continue
        return position if token in _SUBCOMMANDS else None
    return None


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments; exits with a usage message on errors."""
    argv = list(sys.argv[1:] if argv is None else argv)
    split = _subcommand_position(argv)
    head = argv if split is None else argv[:split]

    args = _main_parser().parse_intermixed_args(head)
    if args.ignore_dirs is None:
        args.ignore_dirs = _default_ignore_dirs()
    args.command = None
    args.statistics = False
    args.no_sort = False
    args.no_total = False
    args.no_entry_check = False

    if split is not None:
        command = _SUBCOMMANDS[argv[split]]
        sub_parser = _aggregate_parser() if command == "aggregate" else _interactive_parser()
        sub_args = sub_parser.parse_intermixed_args(argv[split + 1 :])
        args.command = command
        for name, value in vars(sub_args).items():
            setattr(args, name, value)
    return args


def walk_options_from_args(args: argparse.Namespace) -> WalkOptions:
    """Build walk options from parsed arguments; 0 threads means one per processor."""
    threads = args.threads or (os.cpu_count() or 1)
    return WalkOptions(
        threads=threads,
        apparent_size=args.apparent_size,
        count_hard_links=args.count_hard_links,
        sorted_by_name=False,
        cross_filesystems=not args.stay_on_filesystem,
        ignore_dirs=tuple(args.ignore_dirs),
    )


def cwd_dirlist() -> list[Path]:
    """Return the entries of the current directory, without symlinks, sorted."""
    paths = []
    with os.scandir(".") as entries:
        for entry in entries:
            if entry.is_symlink():
                continue
            paths.append(Path(entry.name))
    return sorted(paths)


def extract_paths_maybe_set_cwd(
    paths: Sequence[str | os.PathLike[str]], cross_filesystems: bool
) -> list[Path]:
    """Choose the paths to traverse.

    A single directory becomes the working directory and its entries are used;
    no paths means the entries of the working directory. Unless
    ``cross_filesystems`` is set, entries on other devices are left out.
    """
    chosen = [Path(p) for p in paths]
    if len(chosen) == 1 and chosen[0].is_dir():
        os.chdir(chosen[0])
        chosen = []
    if chosen:
        return chosen

    try:
        device_id: int | None = os.stat(os.getcwd()).st_dev
    except OSError:
        device_id = None

    entries = cwd_dirlist()
    if device_id is None or cross_filesystems:
        return entries

    def same_device(path: Path) -> bool:
        try:
            return os.stat(path).st_dev == device_id
        except OSError:
            return True

    return [path for path in entries if same_device(path)]