import pytest

from kvlines.utils import atomic_open
from kvlines.utils import split_key_list
from kvlines.utils import unescape
from kvlines.utils import unique_everseen


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("", ""),
        ("=", "="),
        ("\\n", "\n"),
        ("\\r\\n", "\r\n"),
        ("\\t", "\t"),
        ("a\\\\nb", "a\\nb"),
        ("\\x", "\\x"),
    ],
)
def test_unescape(value, expected):
    assert unescape(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ("", []),
        ("foo", ["foo"]),
        ("foo, baz", ["foo", "baz"]),
        (" foo ,baz,, ", ["foo", "baz"]),
    ],
)
def test_split_key_list(value, expected):
    assert split_key_list(value) == expected


def test_unique_everseen():
    assert list(unique_everseen("abacb")) == ["a", "b", "c"]


def test_atomic_open(tmp_path):
    filename = tmp_path / "out.txt"
    with atomic_open(str(filename), "wb") as f:
        f.write(b"data")
        assert not filename.exists()
    assert filename.read_bytes() == b"data"
    assert list(tmp_path.iterdir()) == [filename]


def test_atomic_open_failure_keeps_old_file(tmp_path):
    filename = tmp_path / "out.txt"
    filename.write_bytes(b"old")
    with pytest.raises(RuntimeError):
        with atomic_open(str(filename), "wb") as f:
            f.write(b"new")
            raise RuntimeError("boom")
    assert filename.read_bytes() == b"old"
    assert list(tmp_path.iterdir()) == [filename]
