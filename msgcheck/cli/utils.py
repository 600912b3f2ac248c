"""CLI Utility Functions"""

import sys
from pathlib import Path

from msgcheck.core import OverrideManager
from msgcheck.core.patterns import WarningManager
from msgcheck.output import bold, dim, info, severity_label, print_success

# git commit -v appends the diff below this line
SCISSORS_LINE = '# ------------------------ >8 ------------------------'
DEFAULT_OVERRIDE_REASON = "Dismissed during review"


class MessageSourceError(Exception):
    """Raised when no commit message can be read."""
    pass


def strip_comments(text: str) -> str:
    """Drop git comment lines and everything below the scissors line."""
    lines = []
    for line in text.split('\n'):
        if line.startswith(SCISSORS_LINE):
            break
        if line.startswith('#'):
            continue
        lines.append(line)
    return '\n'.join(lines).strip('\n')


def read_message(message: str | None = None, path: str | None = None, stdin=None) -> str:
    """Get the message from -m, a file, or piped stdin (in that order)."""
    if message is not None:
        return message

    if path:
        try:
            text = Path(path).read_text(encoding='utf-8')
        except FileNotFoundError:
            raise MessageSourceError(f"File not found: {path}")
        except (OSError, UnicodeDecodeError) as e:
            raise MessageSourceError(f"Could not read {path}: {e}")
        return strip_comments(text)

    stdin = stdin or sys.stdin
    if stdin.isatty():
        raise MessageSourceError("No commit message given. Pass a FILE, use -m, or pipe text in.")
    return strip_comments(stdin.read())


def unique_pattern_ids(warnings) -> list[str]:
    return list(dict.fromkeys(w.pattern_id for w in warnings))


def display_warnings(warnings) -> None:
    """Numbered list, one entry per pattern, with match count and suggestion."""
    by_pattern = {}
    for match in warnings:
        by_pattern.setdefault(match.pattern_id, []).append(match)

    for num, (pattern_id, matches) in enumerate(by_pattern.items(), 1):
        first = matches[0]
        count = f" (x{len(matches)})" if len(matches) > 1 else ""
        snippet = first.matched_text.strip()[:40]
        print(f"  {info(f'[{num}]')} {severity_label(first.severity)} {bold(first.name)}{count}"
              f" {dim(f'{pattern_id} at {first.index}')}")
        if snippet:
            print(f"      {dim(repr(snippet))}")
        if first.suggestion:
            print(f"      {dim(first.suggestion)}")


def _parse_action(raw: str, count: int) -> tuple[str, int | None]:
    """'d2' -> ('d', 1). Number defaults to the first warning."""
    raw = raw.strip().lower()
    if not raw:
        return '', None
    action, number = raw[0], raw[1:].strip()
    if not number:
        return action, 0
    if number.isdigit() and 1 <= int(number) <= count:
        return action, int(number) - 1
    return action, None


def review_warnings(manager: WarningManager, overrides: OverrideManager, prompt=input) -> None:
    """
    Walk the user through the current warnings.

    Actions (optionally followed by the warning number, default 1):
      d  dismiss for this message
      p  dismiss permanently (asks for a reason)
      a  dismiss all for this message
      u  undo the last action
      Enter / q  done
    """
    history = []

    while True:
        warnings = manager.get_warnings()
        if not warnings:
            print_success("No warnings left")
            return

        print()
        display_warnings(warnings)
        ids = unique_pattern_ids(warnings)
        try:
            raw = prompt(f"\n{dim('(d)ismiss, (p)ermanently dismiss, dismiss (a)ll, (u)ndo, or Enter when done: ')}")
        except (KeyboardInterrupt, EOFError):
            return

        action, idx = _parse_action(raw, len(ids))
        if action in ('', 'q'):
            return

        if action == 'u':
            if not history:
                print(dim("Nothing to undo"))
                continue
            snapshot, overridden_id = history.pop()
            manager.restore_snapshot(snapshot)
            if overridden_id:
                overrides.remove_override(overridden_id)
            continue

        if action == 'a':
            history.append((manager.create_snapshot(), None))
            manager.dismiss_all_warnings()
            continue

        if action not in ('d', 'p') or idx is None:
            print(dim(f"Enter d, p, a or u, optionally followed by 1-{len(ids)}"))
            continue

        pattern_id = ids[idx]
        snapshot = manager.create_snapshot()
        if action == 'd':
            history.append((snapshot, None))
            manager.dismiss_warning(pattern_id)
            continue

        try:
            reason = prompt(f"{dim('  Reason (Enter to skip): ')}").strip()
        except (KeyboardInterrupt, EOFError):
            reason = ""
        category = next(w.category for w in warnings if w.pattern_id == pattern_id)
        history.append((snapshot, pattern_id))
        manager.persistently_dismiss_pattern(pattern_id)
        overrides.override_pattern(pattern_id, reason or DEFAULT_OVERRIDE_REASON, category)
