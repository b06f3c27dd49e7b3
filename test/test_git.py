from __future__ import annotations
import os
from pathlib import Path
import sys
import pytest
from promptscript import git
from promptscript.git import (
    Branch,
    BranchResolver,
    RepoLocation,
    RepoLocator,
    parse_head,
    read_gitdir_file,
)


def in_repo(path: Path) -> bool:
    return any((p / ".git").exists() for p in (path, *path.parents))


def test_locate_dotgit_dir(tmp_path: Path) -> None:
    (tmp_path / "a" / ".git").mkdir(parents=True)
    (tmp_path / "a" / "b" / ".git").mkdir(parents=True)
    cwd = tmp_path / "a" / "b" / "c"
    cwd.mkdir()
    assert RepoLocator(cwd).locate() == RepoLocation(
        git_dir=tmp_path / "a" / "b" / ".git",
        work_dir=tmp_path / "a" / "b",
    )


def test_locate_at_cwd(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    loc = RepoLocator(tmp_path).locate()
    assert loc is not None
    assert loc.git_dir == tmp_path / ".git"
    assert loc.work_dir == tmp_path


def test_locate_uses_process_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / "sub").mkdir()
    monkeypatch.chdir(tmp_path / "sub")
    loc = RepoLocator().locate()
    assert loc is not None
    assert loc.git_dir.resolve() == (tmp_path / ".git").resolve()


def test_locate_gitdir_file(tmp_path: Path) -> None:
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "a" / "b" / ".git").write_text(
        "gitdir: ../common/worktrees/b\n", encoding="utf-8"
    )
    # The .git file takes precedence over a .git directory higher up
    (tmp_path / "a" / ".git").mkdir()
    cwd = tmp_path / "a" / "b" / "c"
    cwd.mkdir()
    assert RepoLocator(cwd).locate() == RepoLocation(
        git_dir=tmp_path / "a" / "common" / "worktrees" / "b",
        work_dir=tmp_path / "a" / "b",
    )


def test_locate_gitdir_file_absolute(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "modules" / "sub"
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / ".git").write_text(f"gitdir: {target}\n", encoding="utf-8")
    loc = RepoLocator(tmp_path / "sub").locate()
    assert loc is not None
    assert loc.git_dir == target
    assert loc.work_dir == tmp_path / "sub"


def test_locate_skips_bad_gitdir_file(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / ".git").write_text("not a pointer\n", encoding="utf-8")
    loc = RepoLocator(tmp_path / "sub").locate()
    assert loc is not None
    assert loc.git_dir == tmp_path / ".git"


def test_read_gitdir_file_undecodable(tmp_path: Path) -> None:
    (tmp_path / ".git").write_bytes(b"gitdir: \xff\xfe\n")
    assert read_gitdir_file(tmp_path / ".git") is None


def test_read_gitdir_file_empty_target(tmp_path: Path) -> None:
    (tmp_path / ".git").write_text("gitdir: \n", encoding="utf-8")
    assert read_gitdir_file(tmp_path / ".git") is None


def test_locate_no_repo(tmp_path: Path) -> None:
    if in_repo(tmp_path):
        pytest.skip("Temporary directory is inside a Git repository")
    locator = RepoLocator(tmp_path)
    assert locator.locate() is None
    assert locator.searched


def test_locate_caches_absence(tmp_path: Path) -> None:
    if in_repo(tmp_path):
        pytest.skip("Temporary directory is inside a Git repository")
    locator = RepoLocator(tmp_path)
    assert locator.locate() is None
    (tmp_path / ".git").mkdir()
    assert locator.locate() is None


def test_locate_is_memoized(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "repo" / ".git").mkdir(parents=True)
    cwd = tmp_path / "repo" / "x" / "y"
    cwd.mkdir(parents=True)
    calls = 0
    real_stat = os.stat

    def counting_stat(*args, **kwargs):  # type: ignore[no-untyped-def]
        nonlocal calls
        calls += 1
        return real_stat(*args, **kwargs)

    locator = RepoLocator(cwd)
    monkeypatch.setattr(git.os, "stat", counting_stat)
    first = locator.locate()
    searched_calls = calls
    second = locator.locate()
    monkeypatch.undo()
    assert searched_calls > 0
    assert calls == searched_calls
    assert first is second
    assert first is not None
    assert first.git_dir == tmp_path / "repo" / ".git"


def test_locate_disabled(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    locator = RepoLocator(tmp_path, enabled=False)
    assert locator.locate() is None
    assert locator.searched


@pytest.mark.skipif(
    not sys.platform.startswith("linux"), reason="Needs arbitrary bytes in paths"
)
def test_locate_non_utf8_path(tmp_path: Path) -> None:
    weird = tmp_path / os.fsdecode(b"dir\xff")
    (weird / ".git").mkdir(parents=True)
    locator = RepoLocator(weird)
    assert locator.locate() is None
    assert locator.searched


@pytest.mark.parametrize(
    "head,branch",
    [
        ("ref: refs/heads/main", Branch("main", detached=False)),
        ("ref:refs/heads/main", Branch("main", detached=False)),
        ("ref: refs/heads/feature/foo-bar", Branch("feature/foo-bar", detached=False)),
        (
            "ref: refs/remotes/origin/main",
            Branch("refs/remotes/origin/main", detached=False),
        ),
        (
            "abcdef0123456789abcdef0123456789abcdef01",
            Branch("abcdef01", detached=True),
        ),
        ("abc", Branch("abc", detached=True)),
        ("", None),
        ("ref: ", None),
    ],
)
def test_parse_head(head: str, branch: Branch | None) -> None:
    assert parse_head(head) == branch


def test_parse_head_hash_length() -> None:
    assert parse_head("abcdef0123456789", short_hash_len=12) == Branch(
        "abcdef012345", detached=True
    )


def make_repo(tmp_path: Path, head: bytes) -> RepoLocator:
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_bytes(head)
    return RepoLocator(tmp_path)


def test_branch_named(tmp_path: Path) -> None:
    resolver = BranchResolver(make_repo(tmp_path, b"ref: refs/heads/main\n"))
    assert resolver.branch() == Branch("main", detached=False)


def test_branch_detached(tmp_path: Path) -> None:
    resolver = BranchResolver(
        make_repo(tmp_path, b"abcdef0123456789abcdef0123456789abcdef01\n")
    )
    assert resolver.branch() == Branch("abcdef01", detached=True)


def test_branch_via_gitdir_file(tmp_path: Path) -> None:
    real = tmp_path / "main" / ".git" / "worktrees" / "wt"
    real.mkdir(parents=True)
    (real / "HEAD").write_text("ref: refs/heads/topic\n", encoding="utf-8")
    (tmp_path / "wt").mkdir()
    (tmp_path / "wt" / ".git").write_text(
        "gitdir: ../main/.git/worktrees/wt\n", encoding="utf-8"
    )
    resolver = BranchResolver(RepoLocator(tmp_path / "wt"))
    assert resolver.branch() == Branch("topic", detached=False)


def test_branch_undecodable_head(tmp_path: Path) -> None:
    resolver = BranchResolver(make_repo(tmp_path, b"ref: refs/heads/\xff\xfe\n"))
    assert resolver.branch() is None


def test_branch_missing_head(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    assert BranchResolver(RepoLocator(tmp_path)).branch() is None


def test_branch_no_repo(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    locator = RepoLocator(tmp_path, enabled=False)
    assert BranchResolver(locator).branch() is None


def test_read_gitdir_file_nul(tmp_path: Path) -> None:
    (tmp_path / ".git").write_bytes(b"gitdir: ../x\x00y\n")
    assert read_gitdir_file(tmp_path / ".git") is None


def test_locate_skips_gitdir_file_with_nul(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / "wt").mkdir()
    (tmp_path / "wt" / ".git").write_bytes(b"gitdir: ../x\x00y\n")
    loc = RepoLocator(tmp_path / "wt").locate()
    assert loc is not None
    assert loc.git_dir == tmp_path / ".git"


def test_branch_unopenable_git_dir(tmp_path: Path) -> None:
    locator = RepoLocator(tmp_path)
    locator.searched = True
    locator.location = RepoLocation(git_dir=tmp_path / "x\x00y", work_dir=tmp_path)
    assert BranchResolver(locator).branch() is None
