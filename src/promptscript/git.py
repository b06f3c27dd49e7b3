from __future__ import annotations
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import stat
from .util import first_line, is_utf8

log = logging.getLogger(__name__)

#: Default number of characters of the commit hash to show when ``HEAD`` is
#: detached
SHORT_HASH_LEN = 8

#: Prefix of the single line in a ``.git`` file used by worktrees & submodules
GITDIR_PREFIX = "gitdir: "


@dataclass(frozen=True)
class RepoLocation:
    #: The repository's metadata directory (the ``.git`` directory, or the
    #: directory that a ``.git`` file points to)
    git_dir: Path

    #: The root of the working tree, i.e., the directory containing ``.git``
    work_dir: Path


@dataclass(frozen=True)
class Branch:
    #: The name of the current branch, or the short form of the current commit
    #: hash if ``HEAD`` is detached
    name: str

    #: `True` iff the repository is in a detached ``HEAD`` state
    detached: bool


class RepoLocator:
    """
    Finds the Git repository containing the current directory by walking up
    the directory tree, without running ``git``.  The search is performed at
    most once; afterwards, `locate()` returns the cached result (including a
    cached absence).
    """

    def __init__(self, cwd: Path | None = None, enabled: bool = True) -> None:
        self.cwd = cwd
        self.enabled = enabled
        #: `True` iff the search has already been performed
        self.searched = False
        self.location: RepoLocation | None = None

    def locate(self) -> RepoLocation | None:
        if not self.searched:
            self.location = self._search() if self.enabled else None
            self.searched = True
        return self.location

    def _search(self) -> RepoLocation | None:
        try:
            cwd = (self.cwd if self.cwd is not None else Path.cwd()).absolute()
        except OSError as e:
            log.debug("Could not determine current directory: %s", e)
            return None
        for d in (cwd, *cwd.parents):
            dotgit = d / ".git"
            try:
                st = os.stat(dotgit)
            except OSError:
                continue
            if stat.S_ISDIR(st.st_mode):
                # Pretend there's no repository if the path isn't valid UTF-8,
                # for simplicity
                if not is_utf8(dotgit):
                    log.debug("Ignoring non-UTF-8 Git directory %r", dotgit)
                    return None
                log.debug("Found Git directory at %s", dotgit)
                return RepoLocation(git_dir=dotgit, work_dir=d)
            elif stat.S_ISREG(st.st_mode):
                if (git_dir := read_gitdir_file(dotgit)) is None:
                    continue
                if not is_utf8(git_dir):
                    log.debug("Ignoring non-UTF-8 Git directory %r", git_dir)
                    return None
                log.debug("Found %s pointing to %s", dotgit, git_dir)
                return RepoLocation(git_dir=git_dir, work_dir=d)
        log.debug("No Git repository found above %s", cwd)
        return None


def read_gitdir_file(dotgit: Path) -> Path | None:
    """
    Given the path to a ``.git`` file (as created for worktrees &
    submodules), return the normalized path to the metadata directory that it
    points to.  Relative paths are resolved against the directory containing
    the file.  If the file cannot be read or does not start with ``gitdir:
    ``, return `None`.
    """
    try:
        line = first_line(dotgit)
    except (OSError, UnicodeDecodeError) as e:
        log.debug("Could not read %s: %s", dotgit, e)
        return None
    if not line.startswith(GITDIR_PREFIX):
        log.debug("%s does not contain a gitdir line", dotgit)
        return None
    target = line[len(GITDIR_PREFIX) :]
    if not target or "\x00" in target:
        log.debug("%s contains an invalid gitdir path", dotgit)
        return None
    # Normalize lexically; don't resolve symlinks
    return Path(os.path.normpath(dotgit.parent / target))


class BranchResolver:
    """Determines the currently checked-out branch by reading ``HEAD``"""

    def __init__(self, locator: RepoLocator, short_hash_len: int = SHORT_HASH_LEN):
        self.locator = locator
        self.short_hash_len = short_hash_len

    def branch(self) -> Branch | None:
        """
        Return a `Branch` describing the repository's ``HEAD``, or `None` if
        there is no repository or ``HEAD`` cannot be read
        """
        if (loc := self.locator.locate()) is None:
            return None
        try:
            head = first_line(loc.git_dir / "HEAD")
        except (OSError, ValueError) as e:
            log.debug("Could not read HEAD: %s", e)
            return None
        return parse_head(head, self.short_hash_len)


def parse_head(head: str, short_hash_len: int = SHORT_HASH_LEN) -> Branch | None:
    """
    Parse the first line of a ``HEAD`` file.  A symbolic ref names a branch;
    anything else is taken to be a commit hash and is shortened to
    ``short_hash_len`` characters.
    """
    head = head.strip()
    if not head:
        return None
    if head.startswith("ref:"):
        name = head[len("ref:") :].strip()
        name = name.removeprefix("refs/heads/")
        return Branch(name=name, detached=False) if name else None
    else:
        return Branch(name=head[: max(short_hash_len, 0)], detached=True)
