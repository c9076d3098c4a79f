"""結果分組與篩選（樹狀導覽與表格檢視使用）。"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from ..models import SECONDARY_FILE_NOT_FOUND, UnitDescriptor, sort_descriptors

NO_LOCATION = "(no location)"
NO_UNIT = "(no unit)"
ALL_RESULTS = "All Results"
BACKUP_SUMMARY_PREFIX = "[Total files with 'bak' in name:"


class SelectionKind(str, Enum):
    ALL = "ALL"
    LOCATION = "LOCATION"
    UNIT = "UNIT"


@dataclass(frozen=True)
class Selection:
    kind: SelectionKind = SelectionKind.ALL
    location: Optional[str] = None
    unit: Optional[str] = None

    @classmethod
    def all(cls) -> "Selection":
        return cls()

    @classmethod
    def for_location(cls, location: str) -> "Selection":
        return cls(kind=SelectionKind.LOCATION, location=location)

    @classmethod
    def for_unit(cls, location: str, unit: str) -> "Selection":
        return cls(kind=SelectionKind.UNIT, location=location, unit=unit)

    def matches(self, row: UnitDescriptor) -> bool:
        if self.kind == SelectionKind.ALL:
            return True
        if not _same_key(row.location, self.location):
            return False
        if self.kind == SelectionKind.UNIT:
            return _same_key(row.unit, self.unit)
        return True


class FilterState:
    """兩個篩選條件互斥：開啟其中一個即關閉另一個。"""

    def __init__(self) -> None:
        self._missing_secondary = False
        self._missing_program = False

    @property
    def missing_secondary(self) -> bool:
        return self._missing_secondary

    @property
    def missing_program(self) -> bool:
        return self._missing_program

    def set_missing_secondary(self, enabled: bool = True) -> None:
        self._missing_secondary = enabled
        if enabled:
            self._missing_program = False

    def set_missing_program(self, enabled: bool = True) -> None:
        self._missing_program = enabled
        if enabled:
            self._missing_secondary = False

    def clear(self) -> None:
        self._missing_secondary = False
        self._missing_program = False

    def matches(self, row: UnitDescriptor) -> bool:
        if self._missing_program:
            return is_program_missing(row)
        if self._missing_secondary:
            return is_secondary_missing(row)
        return True


@dataclass
class UnitNode:
    key: str
    label: str
    location: str


@dataclass
class LocationNode:
    key: str
    label: str
    units: List[UnitNode] = field(default_factory=list)


def _same_key(left: Optional[str], right: Optional[str]) -> bool:
    return (left or "").upper() == (right or "").upper()


def is_backup_summary(row: UnitDescriptor) -> bool:
    return row.program_file_display.upper().startswith(BACKUP_SUMMARY_PREFIX.upper())


def is_secondary_missing(row: UnitDescriptor) -> bool:
    if is_backup_summary(row):
        return False
    return row.secondary_file_modified is None or _same_key(row.secondary_file, SECONDARY_FILE_NOT_FOUND)


def is_program_missing(row: UnitDescriptor) -> bool:
    return row.program_count == 0


def _group(keys: Iterable[str]) -> List[str]:
    seen: dict[str, str] = {}
    for key in keys:
        seen.setdefault(key.upper(), key)
    return [seen[folded] for folded in sorted(seen)]


class ResultIndex:
    def __init__(self, results: Iterable[UnitDescriptor]) -> None:
        self.results = list(results)

    def build_tree(self) -> List[LocationNode]:
        nodes: List[LocationNode] = []
        for location in _group(row.location or "" for row in self.results):
            units = _group(
                row.unit or "" for row in self.results if _same_key(row.location, location)
            )
            nodes.append(
                LocationNode(
                    key=location,
                    label=location if location.strip() else NO_LOCATION,
                    units=[
                        UnitNode(key=unit, label=unit if unit.strip() else NO_UNIT, location=location)
                        for unit in units
                    ],
                )
            )
        return nodes

    def filter(
        self,
        selection: Optional[Selection] = None,
        state: Optional[FilterState] = None,
    ) -> List[UnitDescriptor]:
        selection = selection or Selection.all()
        rows = [row for row in self.results if selection.matches(row)]
        if state is not None:
            rows = [row for row in rows if state.matches(row)]
        return sort_descriptors(rows)

    def locations(self) -> List[str]:
        return [location for location in _group(row.location or "" for row in self.results) if location.strip()]

    def find_unit(self, location_label: str, unit_label: str) -> Optional[Selection]:
        """依樹狀節點顯示文字找回 Location/Unit 選取。"""
        for node in self.build_tree():
            if not _same_key(node.label, location_label):
                continue
            for unit in node.units:
                if _same_key(unit.label, unit_label):
                    return Selection.for_unit(node.key, unit.key)
        return None
