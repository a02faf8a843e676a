"""
lgh - Log Helper

AI-generated release notes from the commits on a git branch.
"""

__version__ = "0.3.0"

# Output languages the prompts can ask for - single source of truth
# Used by: prompts/builder.py, config (validation), cli/args.py (argparse)
LANGUAGES = {
    'en': 'English',
    'ja': 'Japanese',
}

LANGUAGE_CODES = list(LANGUAGES.keys())

# Per-user working directory under $HOME (config file, generated artifacts)
WORK_DIR = ".lgh"
