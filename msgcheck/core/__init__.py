"""Message Validation Core Package"""

from msgcheck.core.conventional import (
    ConventionalCommit,
    ConventionalCommitValidation,
    format_conventional_commit,
    parse_conventional_commit,
    validate_conventional_commit,
)
from msgcheck.core.overrides import OverrideManager, OverrideRecord
from msgcheck.core.validator import (
    ValidationOptions,
    ValidationResult,
    calculate_quality_score,
    validate_message,
)

__all__ = [
    "ConventionalCommit",
    "ConventionalCommitValidation",
    "format_conventional_commit",
    "parse_conventional_commit",
    "validate_conventional_commit",
    "OverrideManager",
    "OverrideRecord",
    "ValidationOptions",
    "ValidationResult",
    "calculate_quality_score",
    "validate_message",
]
