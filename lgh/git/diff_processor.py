"""Diff Processor - Turn parsed commits into LLM-friendly change text."""

from dataclasses import dataclass, field
from enum import Enum

from lgh.git.log_parser import Commit, FileDiff, is_vector_image

NEW_FILE_MARKER = "new file mode "
DELETED_FILE_MARKER = "deleted file mode "
BINARY_MARKER = "Binary files "


class ChangeStatus(Enum):
    """How a commit touched a file."""
    ADD = "ADD"
    MOD = "MOD"
    DEL = "DEL"


def change_status(diff: FileDiff) -> ChangeStatus:
    for line in diff.contents:
        if line.startswith(NEW_FILE_MARKER):
            return ChangeStatus.ADD
        if line.startswith(DELETED_FILE_MARKER):
            return ChangeStatus.DEL
    return ChangeStatus.MOD


@dataclass
class ProcessorConfig:
    """Tunable settings for diff processing."""
    # Per-file cap on diff content sent to the model
    max_bytes_per_file: int = 40 * 1024


@dataclass
class ProcessedCommit:
    """LLM-ready representation of one commit."""
    overview: str
    bodies: list[str] = field(default_factory=list)
    statuses: list[tuple[str, ChangeStatus]] = field(default_factory=list)
    truncated_files: int = 0

    @property
    def total_files(self) -> int:
        return len(self.statuses)

    @property
    def estimated_tokens(self) -> int:
        """Rough token estimate (~4 chars per token)."""
        return (len(self.overview) + sum(len(b) for b in self.bodies)) // 4


class DiffProcessor:
    """Builds the commit overview and per-file bodies from a parsed Commit."""

    def __init__(self, config: ProcessorConfig | None = None):
        self.config = config or ProcessorConfig()

    def process(self, commit: Commit) -> ProcessedCommit:
        """Main entry point: parsed commit -> overview + one body per file."""
        lines = [
            "## Message",
            commit.message.strip(),
            "## All change list:",
        ]
        result = ProcessedCommit(overview="")

        for diff in commit.diffs:
            status = change_status(diff)
            kept, truncated = self._select_lines(diff)
            if truncated:
                result.truncated_files += 1

            body = f"### File: {diff.path}\n"
            if kept:
                body += "```\n" + "\n".join(kept) + "\n```\n"
            result.bodies.append(body)
            result.statuses.append((diff.path, status))
            lines.append(f"{status.value} {diff.path}")

        result.overview = "\n".join(lines) + "\n"
        return result

    def _select_lines(self, diff: FileDiff) -> tuple[list[str], bool]:
        """Keep content lines up to the byte cap, never splitting a line."""
        if is_vector_image(diff.path):
            return [], False

        kept = []
        used = 0
        for line in diff.contents:
            if line.startswith((NEW_FILE_MARKER, DELETED_FILE_MARKER, BINARY_MARKER)):
                continue
            size = len(line.encode('utf-8'))
            if used + size > self.config.max_bytes_per_file:
                return kept, True
            kept.append(line.strip())
            used += size
        return kept, False
