# duview

Learn where your disk space went.

`duview` walks one or more directories on a background thread, adds up how
much space every file and directory takes (on disk, or by apparent size),
and keeps the result as a tree you can inspect, search and mark for
deletion. Alongside that it holds the pieces a terminal viewer is built
from: column formatting, the footer and header lines, the help text, the
mark pane state and the pane layout.

## What it does

- `duview.tree.walk` walks a directory depth-first without following
  symlinks. Unless `WalkOptions.cross_filesystems` is set it does not enter
  directories on other devices, and directories listed in
  `WalkOptions.ignore_dirs` are listed but not entered.
- `duview.tree.BackgroundTraversal` runs that walk for each input path and
  folds the entries into a `Traversal`, aggregating sizes and entry counts
  up the tree as they arrive. Hard links already seen are skipped unless
  `count_hard_links` is set.
- `duview.glob.glob_search` searches the tree with case-insensitive,
  git-style glob patterns.
- `duview.mark.MarkPane` keeps a list of marked entries and their combined
  size, without counting an entry twice when its parent directory is marked
  too.
- `duview.cli.parse_args` parses the command-line options
  (`--threads`, `--format`, `--apparent-size`, `--count-hard-links`,
  `--stay-on-filesystem`, `--ignore-dirs`, `--log-file`, and the
  `aggregate`/`a` and `interactive`/`i` subcommands) into a namespace.

## Walking a directory

```python
from pathlib import Path

from duview.cli import parse_args, walk_options_from_args
from duview.tree import BackgroundTraversal, Traversal

options = walk_options_from_args(parse_args(["--apparent-size"]))

traversal = Traversal()
walker = BackgroundTraversal(
    traversal.root_index, options, [Path("/var/log")], False, True
)
walker.start()
for event in walker.events():
    if walker.integrate(traversal, event):
        break

root = traversal.tree[traversal.root_index]
print(root.size, "bytes in", root.entry_count, "entries")
```

`integrate` returns `True` once the walk has finished and every
directory's size has been filled in, `False` when at least 250 ms have
passed since the last refresh, and `None` otherwise. Call `stop()` to
abandon a walk early. `walker.stats` holds the number of entries seen, the
I/O errors met and, once finished, the total size and elapsed time.

`duview.cli.extract_paths_maybe_set_cwd` picks the paths to walk the same
way the options describe: a single directory becomes the working directory
and its entries are walked; with no paths, the entries of the working
directory are used.

## Searching

```python
from duview.glob import glob_search

for index in glob_search(traversal.tree, traversal.root_index, "*.log"):
    print(traversal.tree[index].name)
```

A match is not searched further below. An empty or whitespace-only pattern
raises `ValueError`.

## Marked entries

`MarkPane.toggle_index` marks an entry by tree index and returns the pane,
or `None` once nothing is marked any more. `MarkPane.process_events` handles
key presses (`duview.keys.Key`) for moving the selection, removing marks
and requesting deletion (`Ctrl + r`) or moving to the trash (`Ctrl + t`).
`MarkPane.iterate_deletable_items` calls a function you supply for each
marked index; it returns the number of errors met, and zero removes the
mark. `duview.mark.calculate_size_and_count` returns the combined size and
item count of a set of marks.

## Formatting helpers

`duview.entries.shorten_input` shortens a name to a given width with an
ellipsis in the middle; `duview.entries` also formats the modification
time, count and size columns. `duview.footer.footer_text` and
`duview.header.header_spans` build the status and title lines,
`duview.help.help_lines` the help text, and `duview.layout` splits the
window into its panes.

## What it does not do

There is no command to run: `duview` installs no program. It parses the
options but does not print a size report for them, and it does not draw a
terminal screen or read keys from a terminal; it only provides the state,
text and layout such a screen would use. It deletes nothing itself:
deleting marked entries is left to the function passed to
`iterate_deletable_items`. The `threads` option is kept in `WalkOptions`,
but each walk runs on a single background thread.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.