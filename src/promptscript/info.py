from __future__ import annotations
import getpass
import logging
import os
from pathlib import Path, PurePath
import socket

log = logging.getLogger(__name__)

#: Default maximum display length of the path to the current working directory
MAX_CWD_LEN = 30


def username() -> str:
    """Return the name of the logged-in user, or an empty string if unknown"""
    try:
        return getpass.getuser()
    except (KeyError, OSError) as e:
        log.debug("Could not determine username: %s", e)
        return ""


def hostname() -> str:
    return socket.gethostname()


def cwdpath() -> PurePath:
    """
    Return the path to the current working directory.  If the directory is at
    or under :envvar:`HOME`, the path will start with ``~``.
    """
    # Prefer $PWD to os.getcwd() as the former does not resolve symlinks
    cwd: PurePath = Path(os.environ.get("PWD") or os.getcwd())
    try:
        cwd = "~" / cwd.relative_to(Path.home())
    except (ValueError, RuntimeError):
        # RuntimeError: the home directory cannot be determined
        pass
    return cwd


def cwdstr() -> str:
    return str(cwdpath())


def short_cwdstr() -> str:
    """
    Show the path to the current working directory, truncated to be no more
    than `MAX_CWD_LEN` characters long
    """
    return shortpath(cwdpath())


def shortpath(p: PurePath, max_len: int = MAX_CWD_LEN) -> str:
    """
    If the filepath ``p`` is too long (longer than ``max_len``), cut off
    leading components to make it fit; if that's not enough, also truncate the
    final component.  Deleted bits are replaced with ellipses.
    """
    s = str(p)
    if len(s) <= max_len:
        return s
    # Drop the root (or "~") first, then whole components from the left
    parts = list(p.parts[1:]) or list(p.parts)
    while len(parts) > 1 and len(str(PurePath("…", *parts))) > max_len:
        del parts[0]
    s = str(PurePath("…", *parts))
    if len(s) > max_len:
        s = str(PurePath("…", parts[-1][: max_len - 3] + "…"))
    return s
