"""
Locale store merger

Updates records of a locale file by numeric id. Array order is kept;
records that do not exist yet are synthesized with every locale empty and
appended.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..utils.common import SUPPORTED_LOCALES

LocaleRecord = dict[str, Any]


def make_record(record_id: int, key: str) -> LocaleRecord:
    """Empty record shaped like a game locale row."""
    record: LocaleRecord = {"id": record_id, "Key": key}
    for locale in SUPPORTED_LOCALES:
        record[locale] = ""
    return record


def apply_update(
    records: list[LocaleRecord],
    record_id: int,
    locale: str,
    value: str,
    key: Optional[str] = None
) -> list[LocaleRecord]:
    """Set one locale of the record with ``record_id`` in a bare list.

    The list is updated in place and returned.
    """
    LocaleStore("records", records).apply_update(record_id, locale, value, key)
    return records


class LocaleStore:
    """In-memory copy of one locale file, addressed by record id."""

    def __init__(self, name: str, records: Optional[list[LocaleRecord]] = None):
        self.name = name
        self.records: list[LocaleRecord] = records if records is not None else []
        self._index: dict[int, LocaleRecord] = {}
        for record in self.records:
            # First occurrence wins, like a find() over the array
            record_id = record.get("id")
            if isinstance(record_id, int) and record_id not in self._index:
                self._index[record_id] = record
        self.dirty = False
        self.updates = 0

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._index

    def get(self, record_id: int) -> Optional[LocaleRecord]:
        return self._index.get(record_id)

    def value(self, record_id: int, locale: str) -> str:
        """Current text of one locale, ``""`` when the record is absent."""
        record = self._index.get(record_id)
        if record is None:
            return ""
        return str(record.get(locale) or "")

    def ensure(self, record_id: int, key: Optional[str] = None) -> LocaleRecord:
        """Return the record, appending an empty one if it does not exist."""
        record = self._index.get(record_id)
        if record is None:
            record = make_record(record_id, key if key is not None else str(record_id))
            self.records.append(record)
            self._index[record_id] = record
            self.dirty = True
        return record

    def apply_update(
        self,
        record_id: int,
        locale: str,
        value: str,
        key: Optional[str] = None
    ) -> LocaleRecord:
        """Set a single locale field; ``Key`` and other locales are untouched."""
        record = self.ensure(record_id, key)
        record[locale] = value
        self.dirty = True
        self.updates += 1
        return record

    def apply_values(
        self,
        record_id: int,
        values: Mapping[str, str],
        locales: Iterable[str],
        key: Optional[str] = None
    ) -> int:
        """Apply ``values`` for the selected ``locales`` only.

        Locales missing from ``values`` are written as ``""``.
        Returns the number of fields written.
        """
        count = 0
        for locale in locales:
            self.apply_update(record_id, locale, values.get(locale, ""), key)
            count += 1
        return count
