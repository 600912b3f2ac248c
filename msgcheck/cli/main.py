"""CLI Main Entry Point"""

import os
import sys
from pathlib import Path

from msgcheck.config import Config, ConfigManager, load_config, save_config, get_config_path, load_custom_patterns
from msgcheck.core import OverrideManager, ValidationOptions, calculate_quality_score, validate_message
from msgcheck.core.patterns import PatternMatcher, WarningManager
from msgcheck.output import (
    CHECK, CROSS, WARN, ARROW,
    success, error, warning, dim, bold, info,
    print_error, print_success, format_score, colorize_commit_type,
)

from msgcheck.cli.args import parse_args
from msgcheck.cli.commands import display_config, run_install_completion, run_list_patterns
from msgcheck.cli.utils import MessageSourceError, display_warnings, read_message, review_warnings

TRUTHY = {'1', 'true', 'yes', 'on'}


def _display_message(message):
    """Display commit message with horizontal rules and colored type."""
    colored = colorize_commit_type(message)
    lines = colored.split('\n')
    # Use raw message for width calculation (no ANSI codes)
    raw_lines = message.split('\n')
    width = max((len(line) for line in raw_lines), default=40)
    print(f"\n{dim('─' * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim('─' * width))


def _display_report(result, options):
    """Structural checks: length, errors, warnings, suggestions."""
    limit_text = f"{result.subject_length}/{options.subject_length_limit}"
    length = error(limit_text) if result.is_subject_too_long else dim(limit_text)
    body = f"{result.body_length} chars" if result.has_body else "none"
    print(f"{dim('Subject:')} {length}  {dim('Body:')} {dim(body)}")
    if result.conventional_parts is not None and result.conventional_parts.type:
        parts = result.conventional_parts
        scope = f"({parts.scope})" if parts.scope else ""
        breaking = warning(' breaking') if parts.is_breaking_change else ''
        print(f"{dim('Conventional:')} {info(parts.type + scope)}{breaking}")

    for message in result.errors:
        print(f"{error(CROSS)} {error(message)}")
    for message in result.warnings:
        print(f"{warning(WARN)} {warning(message)}")
    for message in result.suggestions:
        print(f"{dim(ARROW)} {dim(message)}")


def _handle_subcommands(args, config):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.list_patterns:
        return run_list_patterns(_build_matcher(config), args.list_patterns), True
    return 0, False


def _build_matcher(config: Config) -> PatternMatcher:
    """Matcher from config; rules that fail to load are reported and skipped."""
    custom, errors = load_custom_patterns(config.custom_patterns)
    for message in errors:
        print(f"Config warning: {message}", file=sys.stderr)
    return PatternMatcher(
        include_built_in=config.include_built_in,
        custom_patterns=custom,
        disabled_patterns=config.disabled_patterns,
    )


def _resolve_options(args, config: Config) -> ValidationOptions:
    """Resolve validation options from args, env, or config.

    Precedence: CLI args > environment variables > config file
    """
    conventional = config.conventional_commit
    env_conventional = os.environ.get('CMC_CONVENTIONAL')
    if env_conventional:
        conventional = env_conventional.strip().lower() in TRUTHY
    if args.conventional:
        conventional = True

    limit = config.subject_length_limit
    env_limit = os.environ.get('CMC_SUBJECT_LIMIT', '')
    if env_limit.isdigit() and int(env_limit) > 0:
        limit = int(env_limit)
    if args.limit and args.limit > 0:
        limit = args.limit

    return ValidationOptions(
        conventional_commit=conventional,
        subject_length_limit=limit,
        provide_suggestions=args.suggest or config.provide_suggestions,
    )


def _offer_to_save_dismissals(manager, config):
    """Write permanently dismissed ids into disabled_patterns if the user agrees."""
    new_ids = [pid for pid in manager.permanently_dismissed if pid not in config.disabled_patterns]
    if not new_ids:
        return
    try:
        answer = input(f"\nDisable {', '.join(new_ids)} in your config? [y/N]: ").strip().lower()
    except (KeyboardInterrupt, EOFError):
        return
    if answer != 'y':
        return

    config.disabled_patterns = config.disabled_patterns + new_ids
    local_path = Path.cwd() / ConfigManager.CONFIG_FILENAME
    global_config = get_config_path() != local_path
    path = save_config(config, global_config=global_config)
    print_success(f"Saved to {path}")


def _check_flow(args, config: Config) -> int:
    """Main check flow.

    Returns:
        int: Exit code
    """
    try:
        message = read_message(args.message, args.file)
    except MessageSourceError as e:
        print_error(str(e))
        return 1

    options = _resolve_options(args, config)
    result = validate_message(message, options)

    manager = WarningManager()
    overrides = OverrideManager()
    if config.detect_patterns and not args.no_patterns:
        matcher = _build_matcher(config)
        analysis = matcher.analyze_message(message, min_severity=args.min_severity or config.min_severity)
        manager.set_warnings(analysis.matches)

    if message.strip():
        _display_message(message)
    _display_report(result, options)

    if manager.get_warnings():
        print(f"\n{bold('Patterns:')}")
        if args.interactive and sys.stdin.isatty():
            review_warnings(manager, overrides)
            _offer_to_save_dismissals(manager, config)
        else:
            display_warnings(manager.get_warnings())

    remaining = manager.get_warnings()
    pattern_errors = sum(1 for m in remaining if m.severity == 'error')
    pattern_warnings = sum(1 for m in remaining if m.severity == 'warning')
    score = result.quality_score
    if remaining:
        score = calculate_quality_score(
            error_count=len(result.errors) + pattern_errors,
            warning_count=len(result.warnings) + pattern_warnings,
            has_body=result.has_body,
            is_conventional=result.is_conventional_commit,
            subject_length=result.subject_length,
            subject_length_limit=options.subject_length_limit,
        )
    print(f"\n{dim('Quality:')} {format_score(score)}")

    for record in overrides.get_overrides():
        print(dim(f"  {record.pattern_id} overridden: {record.reason}"))

    if not result.is_valid or pattern_errors:
        print_error("Commit message has errors")
        return 1
    if args.strict and (result.warnings or pattern_warnings):
        print_error("Commit message has warnings (--strict)")
        return 1

    print(f"{success(CHECK)} Looks good!")
    return 0


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    config = load_config()

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args, config)
    if should_exit:
        return exit_code

    return _check_flow(args, config)


if __name__ == "__main__":
    sys.exit(main())
