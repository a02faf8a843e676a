"""CLI Argument Parsing"""

import argparse
import argcomplete

from lgh import LANGUAGE_CODES, __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lgh',
        description='Understand a git repository better: AI release notes from branch history',
        epilog='Example: lgh bs feature/login -p main',
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    sub = parser.add_subparsers(dest='command', metavar='COMMAND')

    # Branch summary
    bs = sub.add_parser('bs', aliases=['branch-summary'], help='Summarize the commits on a branch')
    bs.add_argument('branch', type=str, help='Branch to summarize')
    bs.add_argument('-p', '--parent', type=str, metavar='BRANCH', help='Base branch (default: config base_branch, "main")')
    bs.add_argument('-r', '--repo', type=str, default='.', metavar='PATH', help='Repository path (default: current directory)')
    bs.add_argument('-o', '--output-dir', type=str, metavar='DIR', help='Where to write summaries (default: ~/.lgh/<repo>/<branch>)')
    bs.add_argument('-l', '--lang', type=str, choices=LANGUAGE_CODES, help='Output language')
    bs.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')
    bs.add_argument('--debug', action='store_true', help='Show prompts, responses and token usage')

    # Setup/config
    config = sub.add_parser('config', help='Configure API key and output language')
    config.add_argument('--api-key', type=str, metavar='KEY', help='Anthropic API key')
    config.add_argument('--lang', type=str, choices=LANGUAGE_CODES, help='Output language')

    sub.add_parser('show-config', help='Show current configuration')
    sub.add_parser('install-completion', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
    return args
