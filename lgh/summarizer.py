"""Branch Summarizer - Turn a branch's commits into release notes."""

import logging
from dataclasses import dataclass
from pathlib import Path

from lgh.git import Commit, DiffProcessor
from lgh.llm import LLMClient, LLMResponse, Message
from lgh.output import Spinner, bold, dim
from lgh.prompts import PromptBuilder

logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "summary.txt"


def commit_log_filename(number: int) -> str:
    return f"CL{number:05d}"


def commit_summary_filename(number: int) -> str:
    return f"CS{number:05d}"


def output_dir_for(root: Path, repo_name: str, branch: str) -> Path:
    """Artifacts live under <root>/<repository>/<branch>."""
    return root / repo_name / branch.replace('/', '_')


@dataclass
class SummaryResult:
    """What a summarize() run produced."""
    output_dir: Path
    summary: str = ""
    summary_path: Path | None = None
    commits: int = 0
    merges: int = 0
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class BranchSummarizer:
    """Summarizes each file, then each commit, then the whole branch."""

    def __init__(
        self,
        client: LLMClient,
        prompts: PromptBuilder | None = None,
        processor: DiffProcessor | None = None,
        debug: bool = False,
    ):
        self.client = client
        self.prompts = prompts or PromptBuilder()
        self.processor = processor or DiffProcessor()
        self.debug = debug

    def summarize(self, commits: list[Commit], output_dir: Path) -> SummaryResult:
        """Commits are newest first; file numbers count down so CL00001 is the oldest."""
        output_dir.mkdir(parents=True, exist_ok=True)
        result = SummaryResult(output_dir=output_dir, commits=len(commits))
        if not commits:
            return result

        total = len(commits)
        summaries = []
        for i, commit in enumerate(commits):
            number = total - i
            if commit.is_merge:
                result.merges += 1
                summaries.append(self._write_merge(commit, output_dir, number))
                continue
            summaries.append(self._summarize_commit(commit, output_dir, number, result))

        response = self._chat(self.prompts.branch_messages("".join(summaries)), "Summarizing branch", result)
        result.summary = response.content
        result.summary_path = self._write(output_dir / SUMMARY_FILENAME, response.content + "\n")
        return result

    def _write_merge(self, commit: Commit, output_dir: Path, number: int) -> str:
        content = f"* Merged: {commit.message.strip()}\n"
        self._write(output_dir / commit_summary_filename(number), content)
        return content

    def _summarize_commit(self, commit: Commit, output_dir: Path, number: int, result: SummaryResult) -> str:
        processed = self.processor.process(commit)
        if processed.truncated_files:
            logger.info("Commit %s: %d file diffs capped", commit.hash[:8], processed.truncated_files)

        logs = f"{processed.overview}\n## Change details:\n"
        for body in processed.bodies:
            messages = self.prompts.file_messages(processed.overview, body)
            response = self._chat(messages, f"Summarizing {commit.hash[:8]}", result)
            logs += response.content + "\n"
        self._write(output_dir / commit_log_filename(number), logs)

        response = self._chat(self.prompts.commit_messages(logs), f"Summarizing {commit.hash[:8]}", result)
        content = response.content + "\n"
        self._write(output_dir / commit_summary_filename(number), content)
        return content

    def _chat(self, messages: list[Message], label: str, result: SummaryResult) -> LLMResponse:
        if self.debug:
            self._print_messages(messages)
        with Spinner(label):
            response = self.client.chat(messages)
        if self.debug:
            print(f"\n{bold('----- Response -----')}\n{response.content}")
            print(dim(f"total: {response.total_tokens} (prompt: {response.prompt_tokens}, completion: {response.completion_tokens})"))
        result.prompt_tokens += response.prompt_tokens
        result.completion_tokens += response.completion_tokens
        return response

    def _print_messages(self, messages: list[Message]) -> None:
        print(f"\n{bold('----- Prompts -----')}")
        for m in messages:
            print(f"--- {m.role} ---\n{m.content}")

    def _write(self, path: Path, content: str) -> Path:
        path.write_text(content, encoding='utf-8')
        logger.debug("Saved %s", path)
        if self.debug:
            print(dim(f"Saved file: {path}"))
        return path
