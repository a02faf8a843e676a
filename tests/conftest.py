"""Shared fixtures: throwaway git repositories and a fake chat client."""

import shutil
import subprocess

import pytest

from lgh.llm import LLMClient, LLMResponse


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def git(repo, *args):
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(repo, name, content, message):
    path = repo / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def repo_path(tmp_path):
    """Empty repo on `main` with one initial commit."""
    repo = tmp_path / "sample-repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "config", "user.email", "dev@example.com")
    git(repo, "config", "user.name", "Dev")
    git(repo, "config", "commit.gpgsign", "false")
    commit_file(repo, "test.txt", "initial content\n", "Initial commit")
    return repo


class FakeClient(LLMClient):
    """Records every conversation and answers with a numbered reply."""

    def __init__(self, prompt_tokens=10, completion_tokens=5):
        self.calls = []
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens

    @property
    def name(self) -> str:
        return "Fake"

    def chat(self, messages):
        self.calls.append(messages)
        return LLMResponse(
            content=f"* reply {len(self.calls)}",
            model="fake",
            prompt_tokens=self.prompt_tokens,
            completion_tokens=self.completion_tokens,
        )


@pytest.fixture
def fake_client():
    return FakeClient()
