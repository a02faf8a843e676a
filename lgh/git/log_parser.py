"""Log Parser - Turn raw `git log -p` output into Commit and FileDiff records."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from lgh.git.errors import LineTooLongError, MalformedLogError

logger = logging.getLogger(__name__)

# Longest single line the parser accepts (bytes for raw output, chars for text)
DEFAULT_MAX_LINE_LENGTH = 2 * 1024 * 1024

# Vector images diff as text but are noise for a summary and blow up size budgets
VECTOR_IMAGE_EXTENSIONS = ('.svg', '.svgz')

COMMIT_PREFIX = "commit "
AUTHOR_PREFIX = "Author: "
DATE_PREFIX = "Date:   "
DIFF_PREFIX = "diff --git "
INDEX_PREFIX = "index "
FILE_HEADER_PREFIXES = ("+++ ", "--- ")


def is_vector_image(path: str) -> bool:
    """True when an image extension appears anywhere in the path, e.g. `jquery.svg.js`."""
    lowered = path.lower()
    return any(ext in lowered for ext in VECTOR_IMAGE_EXTENSIONS)


@dataclass(frozen=True)
class FileDiff:
    """A single file's changes within one commit."""
    path: str
    index_before: str = ""
    index_after: str = ""
    contents: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "\n".join(self.contents)


@dataclass(frozen=True)
class Commit:
    """One commit from the log, with its file diffs in source order."""
    hash: str
    author: str = ""
    date: str = ""
    message: str = ""
    diffs: tuple[FileDiff, ...] = ()

    @property
    def is_merge(self) -> bool:
        """A first-parent log shows no diff for a merge commit."""
        return len(self.diffs) == 0

    @property
    def subject(self) -> str:
        stripped = self.message.strip()
        return stripped.split('\n')[0].strip() if stripped else ""


class LineKind(Enum):
    """Syntactic role of a raw log line."""
    COMMIT = "commit"
    AUTHOR = "author"
    DATE = "date"
    DIFF = "diff"
    INDEX = "index"
    FILE_HEADER = "file_header"
    OTHER = "other"


def classify(line: str) -> LineKind:
    """Classify a log line by prefix. First match wins."""
    if line.startswith(COMMIT_PREFIX):
        return LineKind.COMMIT
    if line.startswith(AUTHOR_PREFIX):
        return LineKind.AUTHOR
    if line.startswith(DATE_PREFIX):
        return LineKind.DATE
    if line.startswith(DIFF_PREFIX):
        return LineKind.DIFF
    if line.startswith(INDEX_PREFIX):
        return LineKind.INDEX
    if line.startswith(FILE_HEADER_PREFIXES):
        return LineKind.FILE_HEADER
    return LineKind.OTHER


class ParserState(Enum):
    NO_COMMIT = "no_commit"
    IN_COMMIT = "in_commit"
    IN_DIFF = "in_diff"


@dataclass
class _DiffBuilder:
    path: str
    index_before: str = ""
    index_after: str = ""
    contents: list[str] = field(default_factory=list)

    def seal(self) -> FileDiff:
        return FileDiff(
            path=self.path,
            index_before=self.index_before,
            index_after=self.index_after,
            contents=tuple(self.contents),
        )


@dataclass
class _CommitBuilder:
    hash: str
    author: str = ""
    date: str = ""
    message_lines: list[str] = field(default_factory=list)
    diffs: list[FileDiff] = field(default_factory=list)

    def seal(self) -> Commit:
        return Commit(
            hash=self.hash,
            author=self.author,
            date=self.date,
            message="".join(self.message_lines),
            diffs=tuple(self.diffs),
        )


def _diff_path(line: str, line_number: int) -> str:
    tokens = line.split()
    if len(tokens) < 3:
        raise MalformedLogError(f"diff header without a path: {line[:80]!r}", line_number)
    return tokens[2].removeprefix("a/")


def _index_ids(line: str, line_number: int) -> tuple[str, str]:
    tokens = line.split()
    if len(tokens) < 2 or ".." not in tokens[1]:
        raise MalformedLogError(f"index line without a `..` range: {line[:80]!r}", line_number)
    before, _, after = tokens[1].partition("..")
    return before, after


class _LogScan:
    """Accumulator for one pass over the log. Owns the open commit and diff."""

    def __init__(self):
        self.state = ParserState.NO_COMMIT
        self.commits: list[Commit] = []
        self._commit: _CommitBuilder | None = None
        self._diff: _DiffBuilder | None = None

    def feed(self, line: str, line_number: int) -> None:
        kind = classify(line)

        if kind is LineKind.COMMIT:
            self._seal_commit()
            self._commit = _CommitBuilder(hash=line[len(COMMIT_PREFIX):])
            self.state = ParserState.IN_COMMIT
            return

        # Anything before the first commit boundary is preamble
        if self.state is ParserState.NO_COMMIT:
            return

        if kind is LineKind.AUTHOR:
            self._commit.author = line[len(AUTHOR_PREFIX):]
        elif kind is LineKind.DATE:
            self._commit.date = line[len(DATE_PREFIX):]
        elif kind is LineKind.DIFF:
            self._seal_diff()
            self._diff = _DiffBuilder(path=_diff_path(line, line_number))
            self.state = ParserState.IN_DIFF
        elif kind is LineKind.INDEX:
            if self.state is ParserState.IN_DIFF:
                self._diff.index_before, self._diff.index_after = _index_ids(line, line_number)
        elif kind is LineKind.FILE_HEADER:
            pass
        elif self.state is ParserState.IN_DIFF:
            if not is_vector_image(self._diff.path):
                self._diff.contents.append(line)
        else:
            self._commit.message_lines.append(line + "\n")

    def finish(self) -> list[Commit]:
        self._seal_commit()
        self.state = ParserState.NO_COMMIT
        return self.commits

    def _seal_diff(self) -> None:
        if self._diff is not None:
            self._commit.diffs.append(self._diff.seal())
            self._diff = None
            self.state = ParserState.IN_COMMIT

    def _seal_commit(self) -> None:
        if self._commit is None:
            return
        self._seal_diff()
        self.commits.append(self._commit.seal())
        self._commit = None


class LogParser:
    """Parses `git log -p --no-color` output in a single pass."""

    def __init__(self, max_line_length: int = DEFAULT_MAX_LINE_LENGTH, encoding: str = 'utf-8'):
        self.max_line_length = max_line_length
        self.encoding = encoding

    def parse(self, output: bytes | str) -> list[Commit]:
        """Parse raw log output into commits, in the order git printed them.

        Raises MalformedLogError or LineTooLongError; never returns a partial list.
        """
        scan = _LogScan()
        for line_number, line in self._lines(output):
            scan.feed(line, line_number)
        commits = scan.finish()
        logger.debug("Parsed %d commits (%d merges)", len(commits), sum(c.is_merge for c in commits))
        return commits

    def _lines(self, output: bytes | str):
        """Yield (line_number, text) with line-scanner semantics."""
        separator = b"\n" if isinstance(output, bytes) else "\n"
        chunks = output.split(separator)
        if chunks and not chunks[-1]:
            chunks.pop()

        for line_number, chunk in enumerate(chunks, 1):
            if len(chunk) > self.max_line_length:
                raise LineTooLongError(line_number, len(chunk), self.max_line_length)
            if isinstance(chunk, bytes):
                try:
                    chunk = chunk.decode(self.encoding)
                except UnicodeDecodeError as e:
                    raise MalformedLogError(f"not valid {self.encoding} text ({e.reason})", line_number) from e
            yield line_number, chunk.removesuffix("\r")


def parse_log(output: bytes | str, max_line_length: int = DEFAULT_MAX_LINE_LENGTH) -> list[Commit]:
    """Convenience wrapper around LogParser.parse()."""
    return LogParser(max_line_length=max_line_length).parse(output)
