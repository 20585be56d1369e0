import os
import re
import tempfile
from contextlib import contextmanager


_escapes = {"\\": "\\", "n": "\n", "r": "\r", "t": "\t"}
_escape_re = re.compile(r"\\(.)", re.DOTALL)
_key_list_re = re.compile(r"\s*,\s*")


def unescape(value):
    """Resolves the backslash escapes ``\\n``, ``\\r``, ``\\t`` and ``\\\\``
    so newlines can be given on a command line.  Unknown escapes are kept
    as they are.
    """
    if value is None:
        return None

    def _sub(match):
        char = match.group(1)
        return _escapes.get(char, match.group(0))

    return _escape_re.sub(_sub, value)


def split_key_list(value):
    """Splits a comma separated list of keys.  Blank entries are skipped."""
    if not value:
        return []
    return [x for x in _key_list_re.split(value.strip()) if x]


def unique_everseen(seq):
    """Yields the items of `seq` in order, skipping repeats."""
    seen = set()
    for item in seq:
        if item not in seen:
            seen.add(item)
            yield item


@contextmanager
def atomic_open(filename, mode="r", encoding=None):
    if "r" not in mode:
        fd, tmp_filename = tempfile.mkstemp(
            dir=os.path.dirname(os.path.abspath(filename)), prefix=".__atomic-write"
        )
        os.chmod(tmp_filename, 0o644)
        f = os.fdopen(fd, mode)
    else:
        f = open(filename, mode=mode, encoding=encoding)
        tmp_filename = None
    try:
        yield f
    except Exception:
        f.close()
        if tmp_filename is not None:
            try:
                os.remove(tmp_filename)
            except OSError:
                pass
        raise
    else:
        f.close()
        if tmp_filename is not None:
            os.replace(tmp_filename, filename)
