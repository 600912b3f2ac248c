"""
Warning Manager - Which pattern matches the user still sees.

Two separate pieces of state:
- current warnings: replaced on every set_warnings(), dismissals here
  apply to the current message only
- permanently dismissed ids: kept for the session, filter every future
  set_warnings() call
"""

from dataclasses import dataclass
from enum import Enum

from msgcheck.core.patterns.detection import PatternMatch


class WarningState(Enum):
    NO_WARNINGS = "no-warnings"
    WARNINGS_PRESENT = "warnings-present"
    SOME_DISMISSED = "warnings-present-some-dismissed"


@dataclass(frozen=True)
class WarningSnapshot:
    warnings: tuple[PatternMatch, ...] = ()
    permanently_dismissed: frozenset[str] = frozenset()


class WarningManager:
    """Session-scoped warning list with temporary and permanent dismissal."""

    def __init__(self):
        self._current: list[PatternMatch] = []
        self._permanently_dismissed: set[str] = set()

    @property
    def state(self) -> WarningState:
        if not self._current:
            return WarningState.NO_WARNINGS
        if self._permanently_dismissed:
            return WarningState.SOME_DISMISSED
        return WarningState.WARNINGS_PRESENT

    def set_warnings(self, matches) -> None:
        """Replace current warnings, dropping permanently dismissed patterns."""
        self._current = [m for m in matches if m.pattern_id not in self._permanently_dismissed]

    def get_warnings(self) -> list[PatternMatch]:
        return list(self._current)

    def dismiss_warning(self, pattern_id: str) -> None:
        """Hide a pattern's matches for this message only."""
        self._current = [m for m in self._current if m.pattern_id != pattern_id]

    def dismiss_all_warnings(self) -> None:
        self._current = []

    def persistently_dismiss_pattern(self, pattern_id: str) -> None:
        self._permanently_dismissed.add(pattern_id)
        self.dismiss_warning(pattern_id)

    def remove_persistent_dismissal(self, pattern_id: str) -> None:
        # Already cleared warnings stay cleared until the next set_warnings()
        self._permanently_dismissed.discard(pattern_id)

    def is_permanently_dismissed(self, pattern_id: str) -> bool:
        return pattern_id in self._permanently_dismissed

    @property
    def permanently_dismissed(self) -> list[str]:
        return sorted(self._permanently_dismissed)

    def reset(self) -> None:
        self._current = []
        self._permanently_dismissed.clear()

    def create_snapshot(self) -> WarningSnapshot:
        return WarningSnapshot(
            warnings=tuple(self._current),
            permanently_dismissed=frozenset(self._permanently_dismissed),
        )

    def restore_snapshot(self, snapshot: WarningSnapshot) -> None:
        self._current = list(snapshot.warnings)
        self._permanently_dismissed = set(snapshot.permanently_dismissed)
