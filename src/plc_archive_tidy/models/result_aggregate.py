"""掃描結果與備註的聚合狀態。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .unit_descriptor import UnitDescriptor

NOTE_KEY_SEPARATOR = "::"


def note_key(location: str, unit: str) -> str:
    return f"{location or ''}{NOTE_KEY_SEPARATOR}{unit or ''}"


def sort_descriptors(rows: Iterable[UnitDescriptor]) -> List[UnitDescriptor]:
    return sorted(rows, key=lambda row: row.sort_key())


@dataclass
class ResultAggregate:
    results: List[UnitDescriptor] = field(default_factory=list)
    notes: Dict[str, str] = field(default_factory=dict)

    @property
    def results_count(self) -> int:
        return len(self.results)

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)

    def replace_results(self, rows: Iterable[UnitDescriptor]) -> None:
        # 掃描只整批取代結果，備註不受影響
        self.results = list(rows)

    def get_note(self, location: str, unit: str) -> str:
        return self.notes.get(note_key(location, unit), "")

    def set_note(self, location: str, unit: str, text: str) -> None:
        self.notes[note_key(location, unit)] = text or ""

    def to_dict(self) -> dict[str, object]:
        return {
            "results": [row.to_dict() for row in self.results],
            "notes": dict(self.notes),
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "ResultAggregate":
        raw_results = data.get("results") or []
        raw_notes = data.get("notes") or {}
        return cls(
            results=[UnitDescriptor.from_dict(item) for item in raw_results],  # type: ignore[union-attr]
            notes={str(key): str(value) for key, value in raw_notes.items()},  # type: ignore[union-attr]
        )
