"""Git error types shared by the repository reader and the log parser."""


class GitError(Exception):
    """Base class for everything that goes wrong talking to git."""
    pass


class ExternalToolError(GitError):
    """Raised when the git executable fails to start or exits non-zero."""

    def __init__(self, args: tuple[str, ...], stderr: str = "", returncode: int | None = None):
        self.command = args
        self.stderr = stderr
        self.returncode = returncode
        message = f"Git command failed: git {' '.join(args)}"
        if stderr:
            message += f"\n{stderr.strip()}"
        super().__init__(message)


class ReferenceNotFound(GitError):
    """Raised when a branch or commit reference does not resolve."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Reference `{reference}` does not exist")


class NoCommonAncestor(GitError):
    """Raised when two references share no merge-base."""

    def __init__(self, base: str, target: str, stderr: str = ""):
        self.base = base
        self.target = target
        self.stderr = stderr
        message = f"No common ancestor between `{base}` and `{target}`"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message)


class LogParseError(GitError):
    """Raised when raw `git log` text cannot be parsed."""
    pass


class MalformedLogError(LogParseError):
    """Raised when the log text is not valid line-structured output."""

    def __init__(self, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Malformed git log{where}: {reason}")


class LineTooLongError(LogParseError):
    """Raised when a single log line exceeds the parser's line limit."""

    def __init__(self, line_number: int, length: int, limit: int):
        self.line_number = line_number
        self.length = length
        self.limit = limit
        super().__init__(f"Line {line_number} of git log is {length} bytes, limit is {limit}")
