"""
Custom Pattern Loader

Turns rule definitions from the config file into Pattern records.
Regexes are compiled here; a rule that fails to load never reaches
the matcher.

Rule format (JSON):
{
    "id": "no-jira",
    "name": "Missing Ticket",
    "description": "Subject should reference a ticket",
    "regex": "^(?!.*[A-Z]+-\\d+)",
    "flags": "i",
    "severity": "warning",
    "category": "workflow",
    "suggestion": "Add the ticket key, e.g. PROJ-123",
    "examples": {"good": ["PROJ-1 add login"], "bad": ["add login"]}
}
"""

import re

from msgcheck.core.patterns import CATEGORIES, SEVERITIES, ContextualExamples, Pattern


REQUIRED_KEYS = ('id', 'name', 'regex', 'severity', 'category')
STRING_KEYS = ('id', 'name', 'description', 'regex', 'flags', 'suggestion', 'version')

# "g" mirrors the global flag of JavaScript-style rule files: report every match
REGEX_FLAGS = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
}
FIND_ALL_FLAG = 'g'


class PatternConfigError(Exception):
    """Raised when a custom pattern definition cannot be loaded."""
    pass


def _parse_flags(pattern_id: str, flags: str) -> tuple[int, bool]:
    compiled = 0
    find_all = False
    for flag in flags:
        if flag == FIND_ALL_FLAG:
            find_all = True
        elif flag in REGEX_FLAGS:
            compiled |= REGEX_FLAGS[flag]
        else:
            raise PatternConfigError(f"Pattern '{pattern_id}': unknown regex flag '{flag}'")
    return compiled, find_all


def _parse_examples(pattern_id: str, examples) -> ContextualExamples | None:
    if not examples:
        return None
    if not isinstance(examples, dict):
        raise PatternConfigError(f"Pattern '{pattern_id}': examples must be an object with good/bad lists")
    parsed = {}
    for key in ('good', 'bad'):
        values = examples.get(key, [])
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise PatternConfigError(f"Pattern '{pattern_id}': examples.{key} must be a list of strings")
        parsed[key] = tuple(values)
    return ContextualExamples(**parsed)


def pattern_from_dict(data: dict) -> Pattern:
    """Build a Pattern from a config entry. Raises PatternConfigError."""
    if not isinstance(data, dict):
        raise PatternConfigError(f"Pattern definition must be an object, got {type(data).__name__}")

    missing = [key for key in REQUIRED_KEYS if not data.get(key)]
    pattern_id = data.get('id', '?')
    if missing:
        raise PatternConfigError(f"Pattern '{pattern_id}': missing {', '.join(missing)}")

    for key in STRING_KEYS:
        if data.get(key) is not None and not isinstance(data[key], str):
            raise PatternConfigError(f"Pattern '{pattern_id}': {key} must be a string")

    if data['severity'] not in SEVERITIES:
        raise PatternConfigError(
            f"Pattern '{pattern_id}': invalid severity '{data['severity']}' (use {', '.join(SEVERITIES)})"
        )
    if data['category'] not in CATEGORIES:
        raise PatternConfigError(
            f"Pattern '{pattern_id}': invalid category '{data['category']}' (use {', '.join(CATEGORIES)})"
        )

    flags, find_all = _parse_flags(pattern_id, data.get('flags') or '')
    try:
        regex = re.compile(data['regex'], flags)
    except (re.error, TypeError) as e:
        raise PatternConfigError(f"Pattern '{pattern_id}': invalid regex: {e}")

    contextual = _parse_examples(pattern_id, data.get('examples'))

    return Pattern(
        id=data['id'],
        name=data['name'],
        description=data.get('description') or data['name'],
        regex=regex,
        severity=data['severity'],
        category=data['category'],
        suggestion=data.get('suggestion'),
        contextual_examples=contextual,
        version=data.get('version'),
        find_all=find_all,
    )


def load_custom_patterns(entries) -> tuple[list[Pattern], list[str]]:
    """
    Load every rule that can be loaded.

    Returns:
        (patterns, errors) - one error message per rejected entry
    """
    patterns = []
    errors = []
    for entry in entries or ():
        try:
            patterns.append(pattern_from_dict(entry))
        except PatternConfigError as e:
            errors.append(str(e))
    return patterns, errors
