"""
Conventional Commits - parse, format and validate.

Header grammar: type(scope)!: description
Followed by optional body and footer sections separated by blank lines.
"""

import re
from dataclasses import dataclass, field

from msgcheck import COMMIT_TYPE_NAMES


BREAKING_CHANGE_TOKEN = 'BREAKING CHANGE:'
MAX_DESCRIPTION_LENGTH = 100

HEADER_RE = re.compile(r'^([a-z]+)(?:\(([^)]*)\))?(!)?:\s*(.+)$')
FOOTER_LINE_RE = re.compile(r'^\w+(-\w+)*:\s+.+$', re.MULTILINE)
SECTION_SPLIT_RE = re.compile(r'\n\s*\n')


@dataclass
class ConventionalCommit:
    """One parsed commit message. Re-parsed from scratch on every change."""
    type: str = ""
    scope: str = ""
    description: str = ""
    body: str = ""
    footer: str = ""
    is_breaking_change: bool = False
    is_valid: bool = False


@dataclass
class ConventionalCommitValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _is_footer_section(section: str) -> bool:
    return BREAKING_CHANGE_TOKEN in section or FOOTER_LINE_RE.search(section) is not None


def parse_conventional_commit(message: str) -> ConventionalCommit:
    """
    Parse a commit message into its conventional commit parts.

    Never raises. A message without a recognizable header comes back
    with every field empty and is_valid=False.
    """
    sections = [section.strip() for section in SECTION_SPLIT_RE.split(message or "")]
    header = sections[0]
    rest = sections[1:]

    body = ""
    footer = ""
    if len(rest) == 1:
        body = rest[0]
    elif len(rest) > 1:
        body_parts = [s for s in rest if not _is_footer_section(s)]
        footer_parts = [s for s in rest if _is_footer_section(s)]
        body = '\n\n'.join(body_parts)
        footer = '\n\n'.join(footer_parts)

    match = HEADER_RE.match(header)
    if not match:
        return ConventionalCommit()

    commit_type, scope, bang, description = match.groups()
    return ConventionalCommit(
        type=commit_type,
        scope=scope or "",
        description=description,
        body=body,
        footer=footer,
        is_breaking_change=bool(bang) or BREAKING_CHANGE_TOKEN in footer,
        is_valid=commit_type in COMMIT_TYPE_NAMES,
    )


def format_conventional_commit(commit: ConventionalCommit) -> str:
    """Render a commit back to message text (inverse of parse)."""
    header = commit.type
    if commit.scope:
        header += f"({commit.scope})"
    if commit.is_breaking_change:
        header += '!'
    header += f": {commit.description}"

    message = header
    if commit.body:
        message += f"\n\n{commit.body}"
    if commit.footer:
        message += f"\n\n{commit.footer}"
    return message


def validate_conventional_commit(commit: ConventionalCommit) -> ConventionalCommitValidation:
    """Run every rule and collect all errors and warnings."""
    errors = []
    warnings = []

    if commit.type not in COMMIT_TYPE_NAMES:
        errors.append(f"Invalid commit type: {commit.type}")

    if not commit.description:
        errors.append("Description is required")
    elif len(commit.description) > MAX_DESCRIPTION_LENGTH:
        warnings.append(f"Description is too long (> {MAX_DESCRIPTION_LENGTH} characters)")

    if commit.description and commit.description[0].upper() != commit.description[0]:
        warnings.append("Description should start with a capital letter")

    if commit.is_breaking_change and BREAKING_CHANGE_TOKEN not in commit.footer:
        warnings.append("Breaking changes should be described in the footer")

    return ConventionalCommitValidation(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
    )
