"""
Override Manager - Patterns the user chose to ignore, with a reason.

In-memory only. export_overrides()/import_overrides() hand plain dicts
to whoever wants to persist them.
"""

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Optional


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class OverrideRecord:
    pattern_id: str
    reason: str
    category: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> 'OverrideRecord':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


class OverrideManager:
    """Override records keyed by pattern id; overriding again replaces."""

    def __init__(self):
        self._overrides: dict[str, OverrideRecord] = {}

    def override_pattern(self, pattern_id: str, reason: str, category: Optional[str] = None) -> OverrideRecord:
        record = OverrideRecord(pattern_id=pattern_id, reason=reason, category=category, created_at=_now())
        self._overrides[pattern_id] = record
        return record

    def is_pattern_overridden(self, pattern_id: str) -> bool:
        return pattern_id in self._overrides

    def remove_override(self, pattern_id: str) -> None:
        self._overrides.pop(pattern_id, None)

    def get_overrides(self) -> list[OverrideRecord]:
        return list(self._overrides.values())

    def get_overrides_by_category(self, category: str) -> list[OverrideRecord]:
        return [r for r in self._overrides.values() if r.category == category]

    def clear_all_overrides(self) -> None:
        self._overrides.clear()

    def import_overrides(self, records) -> None:
        """Merge records (dicts or OverrideRecord); missing timestamps are stamped now."""
        for item in records:
            record = OverrideRecord.from_dict(item) if isinstance(item, dict) else item
            if not record.created_at:
                record = OverrideRecord(record.pattern_id, record.reason, record.category, _now())
            self._overrides[record.pattern_id] = record

    def export_overrides(self) -> list[dict]:
        return [asdict(r) for r in self._overrides.values()]
