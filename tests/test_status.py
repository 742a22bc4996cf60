import pytest

from supertd.status import (
    Status,
    StatusKind,
    StatusParseError,
    parse_status,
    read_status,
)

SRC = """
M proj/foo.rs
M bar.rs
A baz/file.txt
R quux.js
"""

EXPECTED = [
    Status(StatusKind.MODIFIED, "proj/foo.rs"),
    Status(StatusKind.MODIFIED, "bar.rs"),
    Status(StatusKind.ADDED, "baz/file.txt"),
    Status(StatusKind.REMOVED, "quux.js"),
]


def test_status():
    assert parse_status(SRC[1:]) == EXPECTED


def test_status_unknown_prefix():
    with pytest.raises(StatusParseError, match="Unknown line prefix"):
        parse_status("X quux.js")


@pytest.mark.parametrize("line", ["notaline", "not a line"])
def test_status_unexpected_format(line):
    with pytest.raises(StatusParseError, match="Unexpected line format"):
        parse_status(line)


def test_status_error_is_value_error():
    with pytest.raises(ValueError):
        parse_status("")  if False else parse_status("\n")


def test_deleted_is_removed():
    assert parse_status("D gone.txt") == [Status(StatusKind.REMOVED, "gone.txt")]


def test_empty_input():
    assert parse_status("") == []


def test_crlf_lines():
    assert parse_status("A a.txt\r\nM b.txt\r\n") == [
        Status(StatusKind.ADDED, "a.txt"),
        Status(StatusKind.MODIFIED, "b.txt"),
    ]


def test_map_keeps_kind():
    mapped = Status(StatusKind.ADDED, "dir/file").map(lambda p: "root//" + p)
    assert mapped == Status(StatusKind.ADDED, "root//dir/file")


def test_read_status(tmp_path):
    path = tmp_path / "status.txt"
    path.write_text(SRC[1:])
    assert read_status(path) == EXPECTED


def test_read_status_missing_file(tmp_path):
    with pytest.raises(OSError, match="When reading"):
        read_status(tmp_path / "missing.txt")