"""
Git repository queries for the git segment.

Everything goes through the ``git`` executable with ``git -C <path>``, one
short synchronous call per question. Each method raises GitError when git
fails, exits nonzero or is missing, and the git segment decides which of
those failures merely drop a fragment of its output.

Output is decoded as UTF-8. Bytes that do not decode, such as a branch
named in a legacy encoding, come through as U+FFFD.
"""

import subprocess
from dataclasses import dataclass

from .errors import GitError


@dataclass(frozen=True)
class DiffStats:
    """Working tree vs. index statistics (``git diff --numstat``)."""

    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


def run_git(cwd: str, *args: str) -> str:
    """Run a git command in ``cwd`` and return its stripped stdout."""
    try:
        result = subprocess.run(
            ["git", "-C", cwd, *args],
            capture_output=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        # Includes FileNotFoundError when git is not installed.
        raise GitError(f"could not run git: {e}") from e
    if result.returncode != 0:
        raise GitError(f"git {' '.join(args)}: {result.stderr.strip() or result.returncode}")
    return result.stdout.strip()


def parse_numstat(output: str) -> DiffStats:
    """Sum ``git diff --numstat`` lines. Binary files count as changed with no lines."""
    files = insertions = deletions = 0
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        files += 1
        if parts[0].isdigit():
            insertions += int(parts[0])
        if parts[1].isdigit():
            deletions += int(parts[1])
    return DiffStats(files, insertions, deletions)


def parse_ahead_behind(output: str) -> tuple[int, int]:
    """Parse ``git rev-list --left-right --count A...B`` into (ahead, behind)."""
    parts = output.split()
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise GitError(f"unexpected rev-list output: {output!r}")
    return int(parts[0]), int(parts[1])


class GitRepository:
    """A discovered git working tree."""

    def __init__(self, root: str, runner=run_git):
        self.root = root
        self._run = runner

    @classmethod
    def discover(cls, path: str, runner=run_git) -> "GitRepository | None":
        """Find the repository enclosing ``path``, or None if there is none."""
        if not path:
            return None
        try:
            if runner(path, "rev-parse", "--is-inside-work-tree") != "true":
                return None
            root = runner(path, "rev-parse", "--show-toplevel")
        except GitError:
            return None
        return cls(root, runner)

    def head_commit(self) -> str | None:
        """The commit HEAD points at, or None while HEAD is unborn."""
        try:
            return self._run(self.root, "rev-parse", "--verify", "--quiet", "HEAD")
        except GitError:
            return None

    def branch(self) -> str | None:
        """Short name of the checked-out branch, or None when HEAD is detached."""
        try:
            return self._run(self.root, "symbolic-ref", "--short", "--quiet", "HEAD") or None
        except GitError:
            return None

    def head_shorthand(self) -> str:
        """Branch name, or the abbreviated commit id when HEAD is detached."""
        branch = self.branch()
        if branch:
            return branch
        return self._run(self.root, "rev-parse", "--short", "HEAD")

    def diff_stats(self) -> DiffStats:
        return parse_numstat(self._run(self.root, "diff", "--numstat"))

    def upstream(self) -> str | None:
        """Upstream of the current branch (e.g. ``origin/main``), if configured."""
        try:
            return self._run(
                self.root, "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}"
            ) or None
        except GitError:
            return None

    def ahead_behind(self, local: str, upstream: str) -> tuple[int, int]:
        """Commits reachable only from ``local`` and only from ``upstream``."""
        output = self._run(
            self.root, "rev-list", "--left-right", "--count", f"{local}...{upstream}"
        )
        return parse_ahead_behind(output)
