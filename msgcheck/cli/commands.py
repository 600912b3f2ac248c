"""CLI Commands"""

import os
import sys

from msgcheck.config import load_config, get_config_path
from msgcheck.core.patterns import PatternMatcher
from msgcheck.output import bold, dim, info, severity_label


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .cmcrc found)")

    env_conventional = os.environ.get('CMC_CONVENTIONAL')
    env_limit = os.environ.get('CMC_SUBJECT_LIMIT')
    if env_conventional or env_limit:
        print(f"  {dim('Environment overrides:')}")
        if env_conventional:
            print(f"    CMC_CONVENTIONAL={env_conventional}")
        if env_limit:
            print(f"    CMC_SUBJECT_LIMIT={env_limit}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    conventional_commit:  {info(str(config.conventional_commit).lower())}")
    print(f"    subject_length_limit: {info(str(config.subject_length_limit))}")
    print(f"    provide_suggestions:  {info(str(config.provide_suggestions).lower())}")
    print(f"    detect_patterns:      {info(str(config.detect_patterns).lower())}")
    print(f"    include_built_in:     {info(str(config.include_built_in).lower())}")
    print(f"    min_severity:         {info(config.min_severity or 'info')}")
    print(f"    disabled_patterns:    {info(', '.join(config.disabled_patterns) or 'none')}")
    print(f"    custom_patterns:      {info(str(len(config.custom_patterns)))}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .cmcrc (in current directory)")
    print(f"    Global: ~/.cmcrc\n")

    return 0


def run_list_patterns(matcher: PatternMatcher, category: str | None = None) -> int:
    """List registered patterns, marking disabled ones."""
    patterns = matcher.get_patterns(None if category in (None, 'all') else category)
    if not patterns:
        print(dim("No patterns registered."))
        return 0

    print(f"\n{bold('Detection Patterns')}\n")
    for pattern in patterns:
        state = dim(' (disabled)') if matcher.is_disabled(pattern.id) else ''
        print(f"  {severity_label(pattern.severity)} {bold(pattern.id)}{state} {dim(pattern.category)}")
        print(f"            {pattern.description}")
        examples = pattern.contextual_examples
        if examples and examples.bad:
            print(dim(f"            e.g. {examples.bad[0]!r}"))
    print()
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete cmc)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_name = '~/.zshrc' if 'zsh' in shell else '~/.bashrc'
        print(f"Add this line to {dim(os.path.expanduser(rc_name))}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_name)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell cmc | Out-String | Invoke-Expression\n")
        print("To make it permanent, add to your $PROFILE:\n")
        print("  register-python-argcomplete --shell powershell cmc | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f'  {line}\n')
        print(f"  {dim('# PowerShell')}")
        print("  register-python-argcomplete --shell powershell cmc | Out-String | Invoke-Expression\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish cmc | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
