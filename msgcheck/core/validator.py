"""
Message Validator - Structural and stylistic checks for a whole message.

Combines the conventional commit parser, length/body heuristics and
(optionally) pattern detection into one ValidationResult with a
quality score between 0 and 1.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from msgcheck.core.conventional import (
    BREAKING_CHANGE_TOKEN,
    ConventionalCommit,
    parse_conventional_commit,
)
from msgcheck.core.patterns import PatternMatch, PatternMatcher


# Score weights. Each error or warning only ever lowers the score.
ERROR_PENALTY = 0.3
WARNING_PENALTY = 0.1
BODY_BONUS = 0.1
CONVENTIONAL_BONUS = 0.1
CONCISE_SUBJECT_BONUS = 0.05

NEAR_LIMIT_RATIO = 0.9       # advisory warning from here up to the limit
CONCISE_RATIO = 0.8          # subject this far under the limit earns a bonus
NON_TRIVIAL_SUBJECT = 30     # longer subjects are expected to come with a body
SHORT_SUBJECT = 10
SHORT_DESCRIPTION = 5

VAGUE_TERMS = {'fix', 'bug', 'issue', 'problem', 'update', 'change', 'stuff', 'things'}

EMPTY_MESSAGE_ERROR = "Commit message cannot be empty"
NOT_CONVENTIONAL_ERROR = "Not a valid conventional commit format"
TYPE_PREFIX_SUGGESTION = "Consider adding a type prefix like 'feat:' or 'fix:'"


@dataclass
class ValidationOptions:
    conventional_commit: bool = False
    subject_length_limit: int = 50
    provide_suggestions: bool = False
    detect_patterns: bool = False


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    quality_score: float = 0.0
    subject: str = ""
    body: str = ""
    subject_length: int = 0
    body_length: int = 0
    has_body: bool = False
    is_subject_too_long: bool = False
    is_conventional_commit: bool = False
    conventional_parts: Optional[ConventionalCommit] = None
    pattern_matches: list[PatternMatch] = field(default_factory=list)


def calculate_quality_score(
    error_count: int,
    warning_count: int,
    has_body: bool = False,
    is_conventional: bool = False,
    subject_length: int = 0,
    subject_length_limit: int = 50,
) -> float:
    """Composite score in [0, 1]: penalties per issue, bonuses for good form."""
    score = 1.0
    score -= ERROR_PENALTY * error_count
    score -= WARNING_PENALTY * warning_count
    if has_body:
        score += BODY_BONUS
    if is_conventional:
        score += CONVENTIONAL_BONUS
    if 0 < subject_length <= subject_length_limit * CONCISE_RATIO:
        score += CONCISE_SUBJECT_BONUS
    return round(max(0.0, min(1.0, score)), 2)


def split_message(message: str) -> tuple[str, str]:
    """First line is the subject; the rest, minus surrounding blank lines, is the body."""
    lines = message.split('\n')
    subject = lines[0].strip()
    rest = lines[1:]
    while rest and not rest[0].strip():
        rest.pop(0)
    while rest and not rest[-1].strip():
        rest.pop()
    return subject, '\n'.join(rest)


def _check_subject(result: ValidationResult, options: ValidationOptions) -> None:
    limit = options.subject_length_limit
    if not result.subject:
        result.errors.append("Subject line cannot be empty")
        return

    if result.is_subject_too_long:
        if options.conventional_commit:
            result.errors.append(f"Subject line exceeds {limit} characters")
        else:
            result.warnings.append("Subject line is too long")
    elif result.subject_length >= math.ceil(limit * NEAR_LIMIT_RATIO):
        result.warnings.append(f"Subject line is close to the {limit} character limit")

    if not result.has_body and result.subject_length > NON_TRIVIAL_SUBJECT:
        result.warnings.append("Consider adding a body to explain the change")


def _check_conventional(result: ValidationResult, message: str) -> None:
    parts = parse_conventional_commit(message)
    result.conventional_parts = parts
    result.is_conventional_commit = parts.is_valid

    if not parts.type:
        result.errors.append(NOT_CONVENTIONAL_ERROR)
        return
    if not parts.is_valid:
        result.warnings.append(f"Unknown commit type: {parts.type}")
    if len(parts.description) < SHORT_DESCRIPTION:
        result.warnings.append("Description is too short")
    if parts.is_breaking_change and BREAKING_CHANGE_TOKEN not in parts.footer:
        result.warnings.append(f"Breaking changes should be described in a {BREAKING_CHANGE_TOKEN} footer")


def _check_patterns(result: ValidationResult, message: str, options: ValidationOptions, matcher) -> None:
    analysis = (matcher or PatternMatcher()).analyze_message(message)
    result.pattern_matches = analysis.matches

    seen = set()
    for match in analysis.matches:
        if match.pattern_id in seen:
            continue
        seen.add(match.pattern_id)
        text = f"{match.name}: {match.description}"
        if match.severity == 'error':
            result.errors.append(text)
        elif match.severity == 'warning':
            result.warnings.append(text)
        elif options.provide_suggestions and match.suggestion:
            result.suggestions.append(match.suggestion)


def _add_suggestions(result: ValidationResult, options: ValidationOptions) -> None:
    subject = result.subject
    if not result.is_conventional_commit and ':' not in subject:
        result.suggestions.append(TYPE_PREFIX_SUGGESTION)
    if result.subject_length < SHORT_SUBJECT:
        result.suggestions.append("Make the subject more descriptive")
    if VAGUE_TERMS.intersection(subject.lower().split()):
        result.suggestions.append("Be more specific about what was changed")
    if not result.has_body and result.subject_length > NON_TRIVIAL_SUBJECT:
        result.suggestions.append("Consider adding a body with more details")
    if result.is_subject_too_long:
        result.suggestions.append(
            f"Shorten the subject line to {options.subject_length_limit} characters or fewer"
        )
    if any(c.isalpha() for c in subject) and subject.upper() == subject:
        result.suggestions.append("Avoid using ALL CAPS in commit messages")


def validate_message(
    message: str,
    options: Optional[ValidationOptions] = None,
    matcher: Optional[PatternMatcher] = None,
) -> ValidationResult:
    """
    Validate a raw commit message.

    Never raises for bad input; problems come back as errors (which make
    the message invalid) and warnings (which only lower the score).

    Args:
        message: Raw commit message text
        options: Validation settings, defaults when None
        matcher: Pattern registry used when options.detect_patterns is set;
            a built-in-only matcher is created when None

    Returns:
        ValidationResult
    """
    options = options or ValidationOptions()
    message = message or ""
    result = ValidationResult()

    if not message.strip():
        result.is_valid = False
        result.errors.append(EMPTY_MESSAGE_ERROR)
        return result

    result.subject, result.body = split_message(message)
    result.subject_length = len(result.subject)
    result.body_length = len(result.body)
    result.has_body = result.body_length > 0
    result.is_subject_too_long = result.subject_length > options.subject_length_limit

    _check_subject(result, options)
    if options.conventional_commit:
        _check_conventional(result, message)
    if options.detect_patterns:
        _check_patterns(result, message, options, matcher)
    if options.provide_suggestions:
        _add_suggestions(result, options)
        result.suggestions = list(dict.fromkeys(result.suggestions))

    result.is_valid = not result.errors
    result.quality_score = calculate_quality_score(
        error_count=len(result.errors),
        warning_count=len(result.warnings),
        has_body=result.has_body,
        is_conventional=result.is_conventional_commit,
        subject_length=result.subject_length,
        subject_length_limit=options.subject_length_limit,
    )
    return result
