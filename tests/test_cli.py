import os
from pathlib import Path

import pytest

from duview.cli import (
    ByteFormat,
    cwd_dirlist,
    extract_paths_maybe_set_cwd,
    parse_args,
    walk_options_from_args,
)


def test_format_is_case_insensitive():
    args = parse_args(["-f", "GiB"])
    assert args.format is ByteFormat.GIB
    assert parse_args(["--format", "METRIC"]).format is ByteFormat.METRIC


def test_invalid_format_exits():
    with pytest.raises(SystemExit):
        parse_args(["-f", "furlongs"])


def test_negative_threads_exit():
    with pytest.raises(SystemExit):
        parse_args(["-t", "-1"])


def test_linux_defaults(monkeypatch):
    monkeypatch.setattr("sys.platform", "linux")
    args = parse_args([])
    assert args.format is ByteFormat.BINARY
    assert args.threads == 0
    assert args.ignore_dirs == [Path("/proc"), Path("/dev"), Path("/sys"), Path("/run")]
    assert args.command is None
    assert args.input == []


def test_macos_defaults(monkeypatch):
    monkeypatch.setattr("sys.platform", "darwin")
    args = parse_args([])
    assert args.format is ByteFormat.METRIC
    assert args.threads == 3
    assert args.ignore_dirs == []


def test_ignore_dirs_replace_defaults(monkeypatch):
    monkeypatch.setattr("sys.platform", "linux")
    args = parse_args(["-i", "/a", "--ignore-dirs", "/b"])
    assert args.ignore_dirs == [Path("/a"), Path("/b")]


def test_top_level_inputs_and_flags():
    args = parse_args(["-A", "one", "-x", "two", "-l"])
    assert args.input == [Path("one"), Path("two")]
    assert args.apparent_size and args.stay_on_filesystem and args.count_hard_links


@pytest.mark.parametrize("name", ["aggregate", "a"])
def test_aggregate_subcommand(name):
    args = parse_args(["-t", "2", name, "--stats", "--no-sort", "x", "y"])
    assert args.command == "aggregate"
    assert args.threads == 2
    assert args.statistics and args.no_sort and not args.no_total
    assert args.input == [Path("x"), Path("y")]


@pytest.mark.parametrize("name", ["interactive", "i"])
def test_interactive_subcommand(name):
    args = parse_args([name, "-e", "dir"])
    assert args.command == "interactive"
    assert args.no_entry_check
    assert args.input == [Path("dir")]


def test_option_value_is_not_taken_as_subcommand():
    args = parse_args(["--log-file", "a", "b"])
    assert args.command is None
    assert args.log_file == Path("a")
    assert args.input == [Path("b")]


def test_walk_options_from_args():
    args = parse_args(["-t", "4", "-A", "-x", "-i", "/skip"])
    options = walk_options_from_args(args)
    assert options.threads == 4
    assert options.apparent_size
    assert not options.cross_filesystems
    assert options.ignore_dirs == (Path("/skip"),)


def test_walk_options_zero_threads_uses_processors(monkeypatch):
    monkeypatch.setattr(os, "cpu_count", lambda: 6)
    options = walk_options_from_args(parse_args(["-t", "0"]))
    assert options.threads == 6


def test_cwd_dirlist_sorted_without_symlinks(tmp_path, monkeypatch):
    (tmp_path / "b").write_text("x")
    (tmp_path / "a").mkdir()
    (tmp_path / "c").write_text("y")
    os.symlink(tmp_path / "c", tmp_path / "link")
    monkeypatch.chdir(tmp_path)
    assert cwd_dirlist() == [Path("a"), Path("b"), Path("c")]


def test_single_directory_becomes_cwd(tmp_path, monkeypatch):
    target = tmp_path / "target"
    target.mkdir()
    (target / "z").write_text("1")
    (target / "m").mkdir()
    monkeypatch.chdir(tmp_path)
    result = extract_paths_maybe_set_cwd([target], cross_filesystems=True)
    assert Path.cwd().resolve() == target.resolve()
    assert result == [Path("m"), Path("z")]


def test_same_device_filter_keeps_local_entries(tmp_path, monkeypatch):
    (tmp_path / "f").write_text("1")
    monkeypatch.chdir(tmp_path)
    assert extract_paths_maybe_set_cwd([], cross_filesystems=False) == [Path("f")]


def test_multiple_paths_are_returned_unchanged(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    paths = [tmp_path / "x", tmp_path / "y"]
    assert extract_paths_maybe_set_cwd(paths, cross_filesystems=True) == paths
    assert Path.cwd().resolve() == tmp_path.resolve()


def test_single_file_is_returned_unchanged(tmp_path, monkeypatch):
    file_path = tmp_path / "file"
    file_path.write_text("data")
    monkeypatch.chdir(tmp_path)
    assert extract_paths_maybe_set_cwd([file_path], cross_filesystems=True) == [file_path]