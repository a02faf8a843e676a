"""CLI Commands"""

import os
import sys

from lgh import LANGUAGES
from lgh.config import Config, load_config, save_config, get_config_path
from lgh.output import bold, dim, info, print_success, print_error


def _mask(secret: str | None) -> str:
    if not secret:
        return "not set"
    return f"{secret[:7]}...{secret[-4:]}" if len(secret) > 12 else "****"


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no config found)")

    overrides = [name for name in ('ANTHROPIC_API_KEY', 'LGH_LANG', 'LGH_MODEL') if os.environ.get(name)]
    if overrides:
        print(f"  {dim('Environment overrides:')} {', '.join(overrides)}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    api_key:      {info(_mask(config.api_key))}")
    print(f"    lang:         {info(config.lang)} ({config.full_lang})")
    print(f"    model:        {info(config.model or 'default')}")
    print(f"    base_branch:  {info(config.base_branch)}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .lghrc (in current directory)")
    print(f"    Global: ~/.lgh/config.json")
    print(f"\n  {dim('Run')} lgh config {dim('to configure')}\n")

    return 0


def _read(label: str, desc: str = "", default: str | None = None) -> str | None:
    """Prompt for one value; Enter keeps the default."""
    if desc:
        print(desc)
    try:
        value = input(label).strip()
    except (KeyboardInterrupt, EOFError):
        print()
        return default
    return value or default


def run_setup(api_key: str | None = None, lang: str | None = None) -> int:
    """Save API key and language. Asks interactively when neither is given."""
    current = load_config()

    if api_key is None and lang is None:
        if not sys.stdin.isatty():
            print_error("No settings given. Use --api-key / --lang or run interactively.")
            return 1
        print(f"\n{bold('Setup')}\n")
        api_key = _read("Anthropic API key: ", "Please enter the Anthropic API key (Enter to keep current).", current.api_key)
        choices = "/".join(LANGUAGES)
        lang = _read(f"Output language (available: [{choices}], default: {current.lang}): ", default=current.lang)

    config = Config(
        api_key=api_key or current.api_key,
        lang=lang or current.lang,
        model=current.model,
        base_branch=current.base_branch,
    )
    for warning in config.validate():
        print_error(warning)

    path = save_config(config)
    print_success(f"Saved to {path}")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete lgh)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell lgh | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish lgh | source")

    print(f"\n{dim('After setup, press TAB to autocomplete commands and flags.')}")
    return 0
