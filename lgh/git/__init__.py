"""Git Operations Package"""

from lgh.git.errors import (
    GitError,
    ExternalToolError,
    ReferenceNotFound,
    NoCommonAncestor,
    LogParseError,
    MalformedLogError,
    LineTooLongError,
)
from lgh.git.log_parser import Commit, FileDiff, LogParser, parse_log, DEFAULT_MAX_LINE_LENGTH
from lgh.git.repository import Repository
from lgh.git.diff_processor import DiffProcessor, ProcessedCommit, ProcessorConfig, ChangeStatus, change_status

__all__ = [
    "GitError",
    "ExternalToolError",
    "ReferenceNotFound",
    "NoCommonAncestor",
    "LogParseError",
    "MalformedLogError",
    "LineTooLongError",
    "Commit",
    "FileDiff",
    "LogParser",
    "parse_log",
    "DEFAULT_MAX_LINE_LENGTH",
    "Repository",
    "DiffProcessor",
    "ProcessedCommit",
    "ProcessorConfig",
    "ChangeStatus",
    "change_status",
]
