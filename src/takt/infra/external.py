"""Thin wrappers around the user's editor and git.

Neither wrapper knows anything about the ledger format; both only take
the resolved ledger path.
"""
from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from takt.domain.exceptions import ExternalToolError

logger = logging.getLogger(__name__)

COMMIT_MESSAGE = "Automatic commit from Takt"


def open_editor(editor: str, path: Path) -> None:
    if not editor.strip():
        raise ExternalToolError("TAKT_EDITOR environment variable not set")
    cmd = [*shlex.split(editor), str(path)]
    try:
        result = subprocess.run(cmd, check=False)
    except OSError as exc:
        raise ExternalToolError(f"could not start editor {editor!r}: {exc}") from exc
    if result.returncode != 0:
        raise ExternalToolError(f"editor exited with status {result.returncode}")


def find_git_root(path: Path) -> Path:
    """Walk up from the directory holding *path* to the first one containing ``.git``."""
    current = path.expanduser().resolve().parent
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    raise ExternalToolError("not in a git repository")


def _git(root: Path, *args: str) -> subprocess.CompletedProcess:
    try:
        result = subprocess.run(
            ["git", "-C", str(root), *args], capture_output=True, text=True, check=False,
        )
    except OSError as exc:
        raise ExternalToolError(f"could not run git: {exc}") from exc
    # git exits 1 for benign outcomes such as "nothing to commit".
    if result.returncode not in (0, 1):
        raise ExternalToolError(
            f"git {args[0]} failed ({result.returncode}): {result.stderr.strip()}"
        )
    if result.stderr:
        logger.info("git %s: %s", args[0], result.stderr.strip())
    return result


def commit_ledger(path: Path, push: bool = True) -> list[str]:
    """Stage, commit and optionally push the ledger file. Returns the steps performed."""
    root = find_git_root(path)
    relative = path.expanduser().resolve().relative_to(root)
    steps = []
    _git(root, "add", str(relative))
    steps.append("added")
    _git(root, "commit", "-m", COMMIT_MESSAGE)
    steps.append("committed")
    if push:
        _git(root, "push")
        steps.append("pushed")
    return steps
