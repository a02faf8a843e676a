"""
Tests for the CLI: commit list output and command dispatch.

Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import json
import re

import pytest

from conftest import FakeClient, commit_file, git, requires_git
from lgh.cli import main as cli_main
from lgh.cli.main import _display_commit_list, main
from lgh.config import ConfigManager
from lgh.git.log_parser import Commit, FileDiff

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Keep config and artifacts out of the real home directory."""
    fake = tmp_path / "home"
    fake.mkdir()
    monkeypatch.setattr("pathlib.Path.home", lambda: fake)
    monkeypatch.setattr("lgh.config._manager", ConfigManager())
    monkeypatch.chdir(tmp_path)
    for name in ("ANTHROPIC_API_KEY", "LGH_LANG", "LGH_MODEL"):
        monkeypatch.delenv(name, raising=False)
    return fake


# ---------------------------------------------------------------------------
# Commit list display
# ---------------------------------------------------------------------------

class TestDisplayCommitList:
    """Output from _display_commit_list()."""

    def test_lists_commits_and_files(self, capsys, strip_ansi):
        commits = [
            Commit(hash="b" * 40, message="\n    Merge branch 'x'\n"),
            Commit(
                hash="a" * 40,
                message="\n    Add login\n",
                diffs=(
                    FileDiff(path="src/login.py", contents=("new file mode 100644",)),
                    FileDiff(path="src/old.py", contents=("deleted file mode 100644",)),
                ),
            ),
        ]
        _display_commit_list(commits)
        out = strip_ansi(capsys.readouterr().out)

        assert "2 commits:" in out
        assert "bbbbbbbb Merge branch 'x' (merge)" in out
        assert "aaaaaaaa Add login" in out
        assert "ADD src/login.py" in out
        assert "DEL src/old.py" in out

    def test_long_list_collapses(self, capsys, strip_ansi):
        commits = [Commit(hash=f"{i:040d}", message=f"    change {i}\n") for i in range(5)]
        _display_commit_list(commits, max_shown=2)
        out = strip_ansi(capsys.readouterr().out)

        assert "change 0" in out
        assert "change 2" not in out
        assert "... and 3 more commits" in out


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class TestConfigCommands:

    def test_config_with_flags_saves(self, home, capsys):
        assert main(["config", "--api-key", "sk-ant-abcdefghijkl", "--lang", "ja"]) == 0

        saved = json.loads((home / ".lgh" / "config.json").read_text())
        assert saved == {"api_key": "sk-ant-abcdefghijkl", "lang": "ja", "base_branch": "main"}
        assert "Saved to" in capsys.readouterr().out

    def test_show_config_masks_key(self, home, capsys, tmp_path):
        (tmp_path / ".lghrc").write_text(json.dumps({"api_key": "sk-ant-abcdefghijkl"}))

        assert main(["show-config"]) == 0
        out = capsys.readouterr().out
        assert "sk-ant-abcdefghijkl" not in out
        assert "ijkl" in out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage: lgh" in capsys.readouterr().out


@requires_git
class TestBranchSummaryCommand:

    @pytest.fixture
    def feature_repo(self, repo_path):
        git(repo_path, "checkout", "-q", "-b", "feature/login")
        commit_file(repo_path, "login.py", "def login():\n    pass\n", "Add login")
        return repo_path

    def test_writes_summary(self, feature_repo, home, tmp_path, monkeypatch, capsys):
        client = FakeClient()
        monkeypatch.setattr(cli_main, "get_client", lambda api_key=None, model=None: client)
        out_dir = tmp_path / "out"

        code = main(["bs", "feature/login", "-p", "main", "-r", str(feature_repo), "-o", str(out_dir)])

        assert code == 0
        assert (out_dir / "summary.txt").read_text() == "* reply 3\n"
        assert (out_dir / "CL00001").exists()
        assert len(client.calls) == 3
        assert "* reply 3" in capsys.readouterr().out

    def test_default_output_dir(self, feature_repo, home, monkeypatch):
        monkeypatch.setattr(cli_main, "get_client", lambda api_key=None, model=None: FakeClient())

        assert main(["bs", "feature/login", "-r", str(feature_repo)]) == 0
        assert (home / ".lgh" / "sample-repo" / "feature_login" / "summary.txt").exists()

    def test_missing_branch(self, feature_repo, home, capsys):
        assert main(["bs", "nope", "-r", str(feature_repo)]) == 1
        assert "nope" in capsys.readouterr().err

    def test_no_commits(self, feature_repo, home, capsys):
        assert main(["bs", "main", "-p", "main", "-r", str(feature_repo)]) == 0
        assert "No commits" in capsys.readouterr().out

    def test_not_a_repository(self, home, tmp_path, capsys):
        plain = tmp_path / "plain"
        plain.mkdir()
        assert main(["bs", "main", "-r", str(plain)]) == 1
        assert "Not inside a git repository" in capsys.readouterr().err

    def test_missing_api_key(self, feature_repo, home, capsys):
        assert main(["bs", "feature/login", "-r", str(feature_repo)]) == 1
        assert "No API key" in capsys.readouterr().err
