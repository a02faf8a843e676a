"""Git Repository - Read commit history for a branch range."""

import logging
import subprocess
from pathlib import Path

from lgh.git.errors import ExternalToolError, NoCommonAncestor, ReferenceNotFound
from lgh.git.log_parser import Commit, LogParser

logger = logging.getLogger(__name__)

# First release that understands `--diff-merges=off`
MIN_GIT_VERSION = "2.31"


class Repository:
    """A git working tree, driven through the `git` executable."""

    def __init__(self, path: str | Path = ".", parser: LogParser | None = None):
        self.path = Path(path)
        self.parser = parser or LogParser()

    def _run_git(self, *args: str) -> bytes:
        """Run a git command in the repository and return raw stdout."""
        logger.debug("Running git %s in %s", " ".join(args), self.path)
        if not self.path.is_dir():
            raise ExternalToolError(args, f"Repository path does not exist: {self.path}")
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.path,
                capture_output=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode('utf-8', errors='replace') if e.stderr else ""
            raise ExternalToolError(args, stderr, e.returncode) from e
        except FileNotFoundError as e:
            raise ExternalToolError(args, "Git is not installed or not in PATH") from e
        except OSError as e:
            raise ExternalToolError(args, str(e)) from e
        return result.stdout

    def _run_git_text(self, *args: str) -> str:
        return self._run_git(*args).decode('utf-8', errors='replace').strip()

    def is_git_repository(self) -> bool:
        try:
            return self._run_git_text('rev-parse', '--is-inside-work-tree') == 'true'
        except ExternalToolError:
            return False

    def toplevel(self) -> Path:
        return Path(self._run_git_text('rev-parse', '--show-toplevel'))

    @property
    def name(self) -> str:
        """Directory name of the working tree, used to key output directories."""
        return self.toplevel().name

    def verify_reference(self, name: str) -> None:
        """Fail with ReferenceNotFound unless `name` resolves."""
        try:
            self._run_git('rev-parse', '--verify', name)
        except ExternalToolError as e:
            raise ReferenceNotFound(name) from e

    def merge_base(self, a: str, b: str) -> str:
        """Most recent common ancestor of two references."""
        try:
            base = self._run_git_text('merge-base', a, b)
        except ExternalToolError as e:
            raise NoCommonAncestor(a, b, e.stderr) from e
        if not base:
            raise NoCommonAncestor(a, b)
        return base

    def log_range(self, base: str, target: str) -> bytes:
        """Raw first-parent patch log for commits on `target` since its merge-base with `base`."""
        revs = f"{self.merge_base(base, target)}..{target}"
        # Pin options that user config could change so the parser sees stock output
        try:
            return self._run_git(
                '-c', 'core.quotePath=false',
                'log', '--first-parent', '--diff-merges=off', '--no-decorate', '-p', '--no-color', revs,
            )
        except ExternalToolError as e:
            if '--diff-merges' in e.stderr:
                raise ExternalToolError(
                    e.command, f"{e.stderr.strip()}\nlgh needs git {MIN_GIT_VERSION} or newer", e.returncode,
                ) from e
            raise

    def commits_on_branch(self, target: str, base: str) -> list[Commit]:
        """Commits reachable from `target` but not `base`, newest first."""
        self.verify_reference(target)
        self.verify_reference(base)

        commits = self.parser.parse(self.log_range(base, target))
        logger.debug("Found %d commits on %s since %s", len(commits), target, base)
        return commits
