"""
Pattern Optimizer - Cheap pre-checks for the "any issue at all?" probe.

Each pattern gets a set of literal words that every match must contain
(when that can be proven from the regex source) and a priority so that
severe, simple rules run first.
"""

import re
from dataclasses import dataclass, fields
from typing import Optional

from msgcheck.core.patterns.detection import Pattern


SEVERITY_PRIORITY = {
    'error': 0,
    'warning': 10,
    'info': 20,
}
UNKNOWN_SEVERITY_PRIORITY = 30
MIN_LITERAL_LENGTH = 3

_ESCAPE_RE = re.compile(r'\\.')
_CHAR_CLASS_RE = re.compile(r'\[[^\]]*\]')
_OPTIONAL_CHAR_RE = re.compile(r'\w(?=[?*]|\{0?,|\{0\})')
_OPTIONAL_GROUP_RE = re.compile(r'\)(?:[?*]|\{0?,|\{0\})')
# Named groups, backreferences and inline flags carry no literal text
_GROUP_PREFIX_RE = re.compile(r'\(\?P<\w+>|\(\?P=\w+\)|\(\?[aiLmsux-]+\)?')
_LITERAL_RE = re.compile(r'\w{%d,}' % MIN_LITERAL_LENGTH)


@dataclass(frozen=True)
class OptimizedPattern(Pattern):
    quick_check: Optional[tuple[str, ...]] = None
    priority: float = 0.0


def extract_quick_check_strings(pattern: Pattern) -> Optional[tuple[str, ...]]:
    """
    Literal words of which at least one appears in any match.

    Returns None when the source has an alternative without a literal
    or an optional group, since then nothing can be proven.
    """
    source = _ESCAPE_RE.sub(' ', pattern.regex.pattern)
    source = _CHAR_CLASS_RE.sub(' ', source)
    if '(?!' in source or '(?<!' in source or _OPTIONAL_GROUP_RE.search(source):
        return None
    source = _GROUP_PREFIX_RE.sub('(', source)
    # A character made optional by ? or * cannot be part of a required literal
    source = _OPTIONAL_CHAR_RE.sub(' ', source)

    literals = []
    for alternative in source.split('|'):
        found = _LITERAL_RE.findall(alternative)
        if not found:
            return None
        literals.extend(word.lower() for word in found)

    return tuple(dict.fromkeys(literals))


def calculate_pattern_priority(pattern: Pattern) -> float:
    """Lower runs first: severity sets the band, regex complexity the offset."""
    score = SEVERITY_PRIORITY.get(pattern.severity, UNKNOWN_SEVERITY_PRIORITY)

    source = pattern.regex.pattern
    complexity = len(source) / 10
    if '(?' in source:
        complexity += 5
    if '|' in source:
        complexity += 3
    if '*' in source or '+' in source:
        complexity += 2
    if '{' in source:
        complexity += 2

    return score + complexity


def optimize_patterns(patterns) -> list[OptimizedPattern]:
    """Attach quick-check literals and priorities, sorted by priority."""
    optimized = []
    for pattern in patterns:
        values = {f.name: getattr(pattern, f.name) for f in fields(Pattern)}
        optimized.append(OptimizedPattern(
            **values,
            quick_check=extract_quick_check_strings(pattern),
            priority=calculate_pattern_priority(pattern),
        ))
    return sorted(optimized, key=lambda p: p.priority)


def quick_detect_patterns(text: str, patterns) -> bool:
    """True as soon as any pattern matches, skipping ones that cannot."""
    if not text or not patterns:
        return False

    lower_text = text.lower()
    for pattern in patterns:
        if pattern.quick_check and not any(word in lower_text for word in pattern.quick_check):
            continue
        if pattern.regex.search(text):
            return True
    return False
