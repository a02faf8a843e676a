"""CLI Main Entry Point"""

import logging
import os
from pathlib import Path

from lgh import LANGUAGES
from lgh.config import Config, load_config, work_dir
from lgh.git import Commit, GitError, Repository, change_status
from lgh.llm import get_client, LLMError
from lgh.output import bold, dim, info, success, print_error, print_warning, print_success, colorize_status
from lgh.prompts import PromptBuilder, PromptConfig
from lgh.summarizer import BranchSummarizer, output_dir_for

from lgh.cli.args import parse_args
from lgh.cli.commands import display_config, run_setup, run_install_completion

MAX_COMMITS_SHOWN = 20


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _resolve_settings(args, config: Config) -> tuple[str | None, str, str | None]:
    """Resolve API key, language and model.

    Precedence: CLI args > environment variables > config file
    """
    api_key = os.environ.get('ANTHROPIC_API_KEY') or config.api_key
    lang = args.lang or os.environ.get('LGH_LANG') or config.lang
    if lang not in LANGUAGES:
        print_warning(f"Unknown language '{lang}', using '{config.lang}'")
        lang = config.lang
    model = args.model or os.environ.get('LGH_MODEL') or config.model
    return api_key, lang, model


def _display_commit_list(commits: list[Commit], max_shown: int = MAX_COMMITS_SHOWN) -> None:
    """Show the commits that will be summarized, newest first."""
    print(bold(f"{len(commits)} commits:"))
    for commit in commits[:max_shown]:
        if commit.is_merge:
            print(f"  {info(commit.hash[:8])} {commit.subject} {dim('(merge)')}")
            continue
        print(f"  {info(commit.hash[:8])} {commit.subject}")
        for diff in commit.diffs:
            print(f"      {colorize_status(change_status(diff).value)} {dim(diff.path)}")
    remaining = len(commits) - max_shown
    if remaining > 0:
        print(dim(f"  ... and {remaining} more commits"))


def _branch_summary_flow(args, config: Config) -> int:
    """Collect branch commits, summarize them and write the notes.

    Returns:
        int: Exit code
    """
    api_key, lang, model = _resolve_settings(args, config)
    parent = args.parent or config.base_branch

    repo = Repository(args.repo)
    if not repo.is_git_repository():
        print_error(f"Not inside a git repository: {Path(args.repo).resolve()}")
        return 1

    try:
        commits = repo.commits_on_branch(args.branch, parent)
        repo_name = repo.name
    except GitError as e:
        print_error(str(e))
        return 1

    if not commits:
        print(dim(f"No commits on {args.branch} since {parent}."))
        return 0

    _display_commit_list(commits)

    try:
        client = get_client(api_key=api_key, model=model)
    except LLMError as e:
        print_error(str(e))
        return 1

    if args.output_dir:
        output_dir = Path(args.output_dir)
    else:
        output_dir = output_dir_for(work_dir(), repo_name, args.branch)

    print(f"\nSummarizing with {info(client.name)} in {bold(LANGUAGES[lang])}...")
    summarizer = BranchSummarizer(
        client,
        prompts=PromptBuilder(PromptConfig(lang=lang)),
        debug=args.debug,
    )
    try:
        result = summarizer.summarize(commits, output_dir)
    except LLMError as e:
        print_error(str(e))
        return 1
    except OSError as e:
        print_error(f"Could not write summaries: {e}")
        return 1

    print(f"\n{dim('─' * 40)}")
    print(result.summary)
    print(dim('─' * 40))
    print_success(f"Saved to {success(str(result.summary_path))}")
    if args.debug:
        print(dim(f"Total token usage: {result.total_tokens} (prompt: {result.prompt_tokens}, completion: {result.completion_tokens})"))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    if args.command is None:
        return 1
    if args.command == 'install-completion':
        return run_install_completion()
    if args.command == 'show-config':
        return display_config()
    if args.command == 'config':
        return run_setup(api_key=args.api_key, lang=args.lang)

    _configure_logging(args.debug)
    config = load_config()
    return _branch_summary_flow(args, config)
