"""Editor and git wrappers, with subprocess stubbed out."""
import subprocess

import pytest

from takt.domain.exceptions import ExternalToolError
from takt.infra import external


class _Recorder:
    """Stands in for subprocess.run; answers each call with the next return code."""

    def __init__(self, *codes: int) -> None:
        self.codes = list(codes)
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        code = self.codes.pop(0) if self.codes else 0
        return subprocess.CompletedProcess(cmd, code, stdout="", stderr="boom" if code else "")


@pytest.fixture
def repo(tmp_path):
    (tmp_path / ".git").mkdir()
    (tmp_path / "data").mkdir()
    ledger = tmp_path / "data" / "takt.csv"
    ledger.write_text("timestamp,kind,notes\n", encoding="utf-8")
    return tmp_path, ledger


def test_find_git_root_walks_up(repo):
    root, ledger = repo
    assert external.find_git_root(ledger) == root.resolve()


def test_find_git_root_outside_repo(tmp_path, monkeypatch):
    monkeypatch.setattr(external.Path, "exists", lambda self: False)
    with pytest.raises(ExternalToolError, match="not in a git repository"):
        external.find_git_root(tmp_path / "takt.csv")


def test_commit_ledger_runs_add_commit_push(repo, monkeypatch):
    root, ledger = repo
    run = _Recorder(0, 0, 0)
    monkeypatch.setattr(external.subprocess, "run", run)

    assert external.commit_ledger(ledger) == ["added", "committed", "pushed"]

    git_root = str(root.resolve())
    assert run.calls == [
        ["git", "-C", git_root, "add", "data/takt.csv"],
        ["git", "-C", git_root, "commit", "-m", external.COMMIT_MESSAGE],
        ["git", "-C", git_root, "push"],
    ]


def test_commit_tolerates_nothing_to_commit(repo, monkeypatch):
    _, ledger = repo
    run = _Recorder(0, 1)
    monkeypatch.setattr(external.subprocess, "run", run)

    assert external.commit_ledger(ledger, push=False) == ["added", "committed"]
    assert len(run.calls) == 2


def test_commit_fails_on_git_error(repo, monkeypatch):
    _, ledger = repo
    monkeypatch.setattr(external.subprocess, "run", _Recorder(0, 0, 128))

    with pytest.raises(ExternalToolError, match=r"git push failed \(128\): boom"):
        external.commit_ledger(ledger)


def test_missing_git_binary(repo, monkeypatch):
    _, ledger = repo

    def _missing(cmd, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(external.subprocess, "run", _missing)
    with pytest.raises(ExternalToolError, match="could not run git"):
        external.commit_ledger(ledger)


@pytest.mark.parametrize("editor", ["", "   "])
def test_editor_not_set(editor, tmp_path):
    with pytest.raises(ExternalToolError, match="TAKT_EDITOR environment variable not set"):
        external.open_editor(editor, tmp_path / "takt.csv")


def test_editor_command_is_split(tmp_path, monkeypatch):
    run = _Recorder(0)
    monkeypatch.setattr(external.subprocess, "run", run)
    path = tmp_path / "takt.csv"

    external.open_editor("code --wait", path)

    assert run.calls == [["code", "--wait", str(path)]]


def test_editor_failure(tmp_path, monkeypatch):
    monkeypatch.setattr(external.subprocess, "run", _Recorder(2))
    with pytest.raises(ExternalToolError, match="editor exited with status 2"):
        external.open_editor("vim", tmp_path / "takt.csv")
