"""
Pattern Detection - Regex rules for problematic commit messages.

Rules are data: each Pattern is an immutable record, and the built-in
catalog is a table. Adding a rule means adding a row, not a branch.
"""

import re
from dataclasses import dataclass
from typing import Optional


# Severity levels, lowest first
# - info: style preference, does not affect commit quality
# - warning: may indicate a problem
# - error: should be fixed before committing
SEVERITIES = ('info', 'warning', 'error')
SEVERITY_LEVELS = {name: level for level, name in enumerate(SEVERITIES, start=1)}

CATEGORIES = ('best-practices', 'formatting', 'style', 'workflow', 'content')

BUILT_IN_VERSION = "1.0.0"


@dataclass(frozen=True)
class ContextualExamples:
    good: tuple[str, ...] = ()
    bad: tuple[str, ...] = ()


@dataclass(frozen=True)
class Pattern:
    """
    A rule commit messages should follow.

    regex must be a compiled pattern. find_all=True reports every match
    in the text; otherwise only the first one is reported.
    """
    id: str
    name: str
    description: str
    regex: re.Pattern
    severity: str
    category: str
    suggestion: Optional[str] = None
    contextual_examples: Optional[ContextualExamples] = None
    version: Optional[str] = None
    find_all: bool = False


@dataclass(frozen=True)
class PatternMatch:
    """One place where a pattern fired. Offsets index into the scanned text."""
    pattern_id: str
    name: str
    description: str
    severity: str
    category: str
    index: int
    length: int
    matched_text: str
    suggestion: Optional[str] = None
    captures: Optional[tuple[str, ...]] = None


def _to_match(pattern: Pattern, match: re.Match) -> PatternMatch:
    captures = tuple(group for group in match.groups() if group)
    return PatternMatch(
        pattern_id=pattern.id,
        name=pattern.name,
        description=pattern.description,
        severity=pattern.severity,
        category=pattern.category,
        index=match.start(),
        length=match.end() - match.start(),
        matched_text=match.group(0),
        suggestion=pattern.suggestion,
        captures=captures or None,
    )


def detect_patterns(text: str, patterns) -> list[PatternMatch]:
    """
    Scan text against each pattern, in order.

    Compiled patterns keep no search position between calls, so scanning
    is side-effect free and repeated calls return equal results.
    finditer steps past zero-length matches on its own.
    """
    if not text or not patterns:
        return []

    matches = []
    for pattern in patterns:
        if pattern.regex is None:
            continue
        if pattern.find_all:
            matches.extend(_to_match(pattern, m) for m in pattern.regex.finditer(text))
        else:
            m = pattern.regex.search(text)
            if m is not None:
                matches.append(_to_match(pattern, m))
    return matches


BUILT_IN_PATTERNS: tuple[Pattern, ...] = (
    Pattern(
        id='wip-commit',
        name='Work In Progress',
        description='Avoid committing work-in-progress changes',
        regex=re.compile(r'^\[?(?:WIP|TODO|FIXME)\]?:|^\[WIP\]|^WIP\b|^work in progress', re.IGNORECASE),
        severity='warning',
        category='best-practices',
        suggestion='Complete the work before committing, or use git stash instead',
        contextual_examples=ContextualExamples(
            bad=('WIP: still working on this feature', 'TODO: fix this', 'work in progress: not ready yet'),
            good=('Add user authentication feature', 'Fix login redirect issue'),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='long-first-line',
        name='Long First Line',
        description='First line should be 72 characters or less',
        regex=re.compile(r'^.{73,}'),
        severity='warning',
        category='formatting',
        suggestion='Keep the first line short and concise (50-72 characters)',
        contextual_examples=ContextualExamples(
            bad=('This is a very long commit message that exceeds the recommended length limit '
                 'for the first line of a commit message',),
            good=('Fix user authentication bug in login component',),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='non-imperative-mood',
        name='Non-Imperative Mood',
        description='Use imperative mood in commit messages',
        regex=re.compile(
            r'^(Added|Fixed|Updated|Removed|Changed|Implemented|Refactored|Improved)\b',
            re.IGNORECASE,
        ),
        severity='info',
        category='style',
        suggestion='Use imperative mood (e.g., "Add feature" instead of "Added feature")',
        contextual_examples=ContextualExamples(
            bad=('Added user authentication', 'Fixed login bug', 'Updated documentation'),
            good=('Add user authentication', 'Fix login bug', 'Update documentation'),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='trailing-period',
        name='Trailing Period',
        description='First line should not end with a period',
        regex=re.compile(r'\A[^\n]*\.$', re.MULTILINE),
        severity='info',
        category='formatting',
        suggestion='Remove the trailing period from the first line',
        contextual_examples=ContextualExamples(
            bad=('Add user authentication.', 'Fix login redirect issue.'),
            good=('Add user authentication', 'Fix login redirect issue'),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='merge-commit',
        name='Merge Commit',
        description='Avoid merge commits in feature branches',
        regex=re.compile(r'^Merge (?:branch|remote-tracking branch|pull request)'),
        severity='info',
        category='workflow',
        suggestion='Consider using git rebase instead of git merge',
        contextual_examples=ContextualExamples(
            bad=("Merge branch 'main' into feature-branch", 'Merge pull request #123 from username/feature'),
            good=('Add feature X', 'Fix issue with Y'),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='fixup-commit',
        name='Fixup Commit',
        description='Temporary fixup commit detected',
        regex=re.compile(r'^(?:fixup|squash|amend)!', re.IGNORECASE),
        severity='warning',
        category='workflow',
        suggestion='This commit should be squashed before being pushed',
        contextual_examples=ContextualExamples(
            bad=('fixup! Add user authentication', 'squash! Fix login bug'),
            good=('Add user authentication', 'Fix login bug'),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='empty-message',
        name='Empty Message',
        description='Commit message should not be empty',
        # Blank lines and git comment lines only
        regex=re.compile(r'\A(?:[ \t\r]*(?:#[^\n]*)?\n)*[ \t\r]*(?:#[^\n]*)?\Z'),
        severity='error',
        category='best-practices',
        suggestion='Add a meaningful commit message describing the changes',
        contextual_examples=ContextualExamples(
            bad=('', '# With just a comment'),
            good=('Add user authentication', 'Fix login redirect issue'),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='vague-message',
        name='Vague Message',
        description='Commit message is too vague',
        regex=re.compile(
            r'^(fix|update|change|improve|refactor|cleanup)(\s+(?:something|stuff|things|code|it))?\s*$',
            re.IGNORECASE,
        ),
        severity='warning',
        category='content',
        suggestion='Be specific about what was changed and why',
        contextual_examples=ContextualExamples(
            bad=('Fix something', 'Update code', 'Change stuff', 'Improve things'),
            good=('Fix user authentication timeout bug', 'Update React to version 18.2.0'),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='issue-only',
        name='Issue Reference Only',
        description='Commit message contains only an issue reference',
        regex=re.compile(r'^(fix|fixes|fixed|resolve|resolves|resolved|close|closes|closed)?\s*#\d+$', re.IGNORECASE),
        severity='warning',
        category='content',
        suggestion='Include a description of what was changed, not just the issue number',
        contextual_examples=ContextualExamples(
            bad=('#123', 'Fixes #456', 'Resolves #789'),
            good=('Fix login timeout issue (#123)', 'Add user profile editing (#456)'),
        ),
        version=BUILT_IN_VERSION,
    ),
    Pattern(
        id='mixed-tense',
        name='Mixed Tense',
        description='Mixing past and present tense in commit message',
        regex=re.compile(r'(Added|Fixed|Updated|Removed|Changed).*?\b(add|fix|update|remove|change)\b', re.IGNORECASE),
        severity='info',
        category='style',
        suggestion='Use consistent tense (preferably imperative present tense)',
        contextual_examples=ContextualExamples(
            bad=('Added login and fix signup', 'Fixed auth and update styles'),
            good=('Add login and fix signup', 'Fix auth and update styles'),
        ),
        version=BUILT_IN_VERSION,
    ),
)

BUILT_IN_PATTERNS_BY_ID = {pattern.id: pattern for pattern in BUILT_IN_PATTERNS}
