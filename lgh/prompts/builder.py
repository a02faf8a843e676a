"""Prompt Builder - Construct chat messages for release-note summaries."""

from dataclasses import dataclass

from lgh import LANGUAGES
from lgh.llm.base import Message, SYSTEM_PROMPT

# Output formats the model is asked to follow
_FILE_FORMAT = """\
### file.ext (ADD/MOD/DEL)
* Add feature X
* Change B setting
* Fix C bug"""

_COMMIT_FORMAT = """\
* Add feature X to screen A (if the screen name is not clear, assume it based on the file name)
* Change B setting from Y to Z
* Fix C bug"""

_BRANCH_FORMAT = """\
## Implement feature X
* details of the feature and the implementation
## Fix C bug
* details of the bug and the fix"""


@dataclass
class PromptConfig:
    """Settings that shape every prompt."""
    lang: str = "en"

    @property
    def full_lang(self) -> str:
        return LANGUAGES.get(self.lang, LANGUAGES["en"])


class PromptBuilder:
    """Constructs the file, commit and branch summary conversations."""

    def __init__(self, config: PromptConfig | None = None):
        self.config = config or PromptConfig()

    def _system(self) -> Message:
        return Message(role="system", content=SYSTEM_PROMPT)

    def _instruction(self, rules: list[str], output_format: str, heading: str, body: str) -> str:
        rules = rules + [f"Preferred language is {self.config.full_lang}."]
        rule_lines = "\n".join(f"* {r}" for r in rules)
        return f"""# Instruction:
{rule_lines}

# Expected Output Format:
{output_format}

# {heading}:
{body}
"""

    def file_messages(self, overview: str, body: str) -> list[Message]:
        """Summarize one file's change, with the whole commit as context."""
        instruction = "Please summarize the file change briefly, using bullet points and word-for-word descriptions."
        content = instruction + "\n" + self._instruction(
            [
                "Focus on the purpose of the change.",
                "Just return the change of the following file.",
                "Only the filename and brief changes are required.",
            ],
            _FILE_FORMAT,
            "File change to summarize",
            body,
        )
        return [
            self._system(),
            Message(
                role="system",
                content=f"Below is the overview of this entire commit. Take it into account as needed:\n{overview}",
            ),
            Message(role="user", content=content),
        ]

    def commit_messages(self, logs: str) -> list[Message]:
        """Summarize a commit from its overview and per-file summaries."""
        instruction = "Please summarize the git commit briefly, using bullet points and word-for-word descriptions, like release notes."
        content = instruction + "\n" + self._instruction(
            ["Focus on the purpose of the commit, ignore the file-level details."],
            _COMMIT_FORMAT,
            "Commit to summarize",
            logs,
        )
        return [self._system(), Message(role="user", content=content)]

    def branch_messages(self, summaries: str) -> list[Message]:
        """Merge all commit summaries into sectioned release notes."""
        instruction = "Please summarize the changes briefly, using bullet points and word-for-word descriptions, like release notes."
        content = instruction + "\n" + self._instruction(
            [
                "If there are any duplicate or similar commits, combine them, the first one should be the main source.",
                "Combine related items in one section.",
            ],
            _BRANCH_FORMAT,
            "Changes to summarize",
            summaries,
        )
        return [self._system(), Message(role="user", content=content)]
