"""
Pattern Matcher - Mutable registry of rules for one editing session.

Wraps the detection table with add/replace, enable/disable and
severity/category filtering.
"""

from dataclasses import dataclass, field
from typing import Optional

from msgcheck.core.patterns.detection import (
    BUILT_IN_PATTERNS,
    CATEGORIES,
    SEVERITIES,
    SEVERITY_LEVELS,
    Pattern,
    PatternMatch,
    detect_patterns,
)
from msgcheck.core.patterns.optimizer import optimize_patterns, quick_detect_patterns


DEFAULT_MAX_MESSAGE_SIZE = 10000


@dataclass
class AnalysisResult:
    """Matches for one message, plus the same matches grouped for display."""
    matches: list[PatternMatch] = field(default_factory=list)
    has_issues: bool = False
    issues_by_category: dict[str, list[PatternMatch]] = field(default_factory=dict)
    issues_by_severity: dict[str, list[PatternMatch]] = field(default_factory=dict)


class PatternMatcher:
    """
    Ordered registry of patterns keyed by id.

    Adding a pattern whose id already exists replaces it in place.
    Disabled patterns stay listed by get_patterns() but are skipped
    during detection.
    """

    def __init__(
        self,
        include_built_in: bool = True,
        custom_patterns=None,
        disabled_patterns=None,
        max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE,
    ):
        self._patterns: dict[str, Pattern] = {}
        self._disabled: set[str] = set(disabled_patterns or ())
        self.max_message_size = max_message_size
        self._optimized = None

        if include_built_in:
            for pattern in BUILT_IN_PATTERNS:
                self.add_pattern(pattern)
        for pattern in custom_patterns or ():
            self.add_pattern(pattern)

    def _enabled_patterns(self) -> list[Pattern]:
        return [p for p in self._patterns.values() if p.id not in self._disabled]

    def _truncate(self, text: str) -> str:
        return text[:self.max_message_size] if text else ""

    def analyze_message(
        self,
        message: str,
        min_severity: Optional[str] = None,
        category: Optional[str] = None,
        include_disabled: bool = False,
        patterns=None,
    ) -> AnalysisResult:
        """
        Run detection over the message and filter the matches.

        min_severity keeps matches at or above that level
        (info < warning < error). category keeps exact matches only.
        patterns, when given, is scanned as-is instead of the registry;
        the disabled set and category do not apply to it.
        """
        if min_severity is not None and min_severity not in SEVERITY_LEVELS:
            raise ValueError(f"Unknown severity: {min_severity}. Use one of: {', '.join(SEVERITIES)}")

        text = self._truncate(message)
        if patterns is None:
            patterns = list(self._patterns.values()) if include_disabled else self._enabled_patterns()
            if category is not None:
                patterns = [p for p in patterns if p.category == category]

        matches = detect_patterns(text, patterns)
        if min_severity is not None:
            threshold = SEVERITY_LEVELS[min_severity]
            matches = [m for m in matches if SEVERITY_LEVELS.get(m.severity, 0) >= threshold]

        by_category = {name: [] for name in CATEGORIES}
        by_severity = {name: [] for name in SEVERITIES}
        for match in matches:
            by_category.setdefault(match.category, []).append(match)
            by_severity.setdefault(match.severity, []).append(match)

        return AnalysisResult(
            matches=matches,
            has_issues=bool(matches),
            issues_by_category=by_category,
            issues_by_severity=by_severity,
        )

    def get_patterns(self, category: Optional[str] = None) -> list[Pattern]:
        patterns = list(self._patterns.values())
        if category is not None:
            patterns = [p for p in patterns if p.category == category]
        return patterns

    def get_pattern(self, pattern_id: str) -> Optional[Pattern]:
        return self._patterns.get(pattern_id)

    def add_pattern(self, pattern: Pattern) -> None:
        """Insert a pattern, or replace the one with the same id in place."""
        self._patterns[pattern.id] = pattern
        self._optimized = None

    def disable_pattern(self, pattern_id: str) -> None:
        self._disabled.add(pattern_id)
        self._optimized = None

    def enable_pattern(self, pattern_id: str) -> None:
        self._disabled.discard(pattern_id)
        self._optimized = None

    def is_disabled(self, pattern_id: str) -> bool:
        return pattern_id in self._disabled

    def get_patterns_in_text(self, text: str) -> list[Pattern]:
        """Distinct enabled patterns that fire at least once in text."""
        enabled = self._enabled_patterns()
        matched_ids = {m.pattern_id for m in detect_patterns(self._truncate(text), enabled)}
        return [p for p in enabled if p.id in matched_ids]

    def has_any_match(self, text: str) -> bool:
        """Fast yes/no probe; skips rules whose required words are absent."""
        if self._optimized is None:
            self._optimized = optimize_patterns(self._enabled_patterns())
        return quick_detect_patterns(self._truncate(text), self._optimized)
