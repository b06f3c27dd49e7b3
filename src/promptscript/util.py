from __future__ import annotations
from pathlib import Path


def first_line(path: Path) -> str:
    """
    Return the first line of the given file, decoded as UTF-8, with the line
    terminator removed.  I/O and decoding errors propagate to the caller.
    """
    with path.open(encoding="utf-8") as fp:
        return fp.readline().rstrip("\r\n")


def is_utf8(path: Path) -> bool:
    """
    Return `True` iff ``path`` can be represented as UTF-8 text, i.e., it
    contains no undecodable bytes smuggled in as surrogate escapes
    """
    try:
        str(path).encode("utf-8")
    except UnicodeEncodeError:
        return False
    else:
        return True
