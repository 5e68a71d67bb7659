# rythm/core/repositories/entry_repository.py
import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Union

import pandas as pd

from rythm.core.models.data_models import Entry, EntryInput
from rythm.utils.numeric import finite_or_none

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = [
    'id', 'user_id', 'entry_date', 'sleep_hours', 'mood', 'note', 'tags',
    'is_complete', 'completed_at', 'created_at',
]


def _optional_text(value):
    return value if value != '' else None


def _row_to_entry(row) -> Entry:
    sleep_text = row['sleep_hours']
    mood_text = row['mood']
    tags_text = row['tags']
    return Entry(
        id=_optional_text(row['id']),
        user_id=row['user_id'],
        entry_date=row['entry_date'],
        sleep_hours=float(sleep_text) if sleep_text != '' else None,
        mood=int(float(mood_text)) if mood_text != '' else None,
        note=_optional_text(row['note']),
        tags=json.loads(tags_text) if tags_text != '' else None,
        is_complete=row['is_complete'].strip().lower() == 'true',
        completed_at=_optional_text(row['completed_at']),
        created_at=_optional_text(row['created_at']),
    )


def _entry_to_row(entry: Entry) -> Dict[str, str]:
    return {
        'id': entry.id or '',
        'user_id': entry.user_id,
        'entry_date': entry.entry_date,
        'sleep_hours': '' if entry.sleep_hours is None else repr(float(entry.sleep_hours)),
        'mood': '' if entry.mood is None else str(entry.mood),
        'note': entry.note or '',
        'tags': '' if entry.tags is None else json.dumps(entry.tags),
        'is_complete': 'true' if entry.is_complete else 'false',
        'completed_at': entry.completed_at or '',
        'created_at': entry.created_at or '',
    }


class EntryRepository:
    """Data access layer for daily entries, one row per user per day"""

    def __init__(self, data_dir='data'):
        self.data_dir = data_dir
        self.entries_file = os.path.join(data_dir, 'entries.csv')
        self.cache = {}
        os.makedirs(data_dir, exist_ok=True)

    def _read_frame(self) -> pd.DataFrame:
        if not os.path.exists(self.entries_file):
            logger.warning(f"Entries file not found: {self.entries_file}")
            return pd.DataFrame(columns=ENTRY_COLUMNS)

        df = pd.read_csv(self.entries_file, dtype=str, keep_default_na=False)
        for column in ENTRY_COLUMNS:
            if column not in df.columns:
                df[column] = ''
        return df[ENTRY_COLUMNS]

    def _load_entries(self) -> List[Entry]:
        entries = []
        for index, row in self._read_frame().iterrows():
            try:
                entries.append(_row_to_entry(row))
            except ValueError as e:
                logger.warning(f"Skipping invalid entry row {index} in {self.entries_file}: {str(e)}")
        return entries

    def fetch_entries(self, user_id: str) -> List[Entry]:
        """Get all entries for a user, sorted by entry date"""
        if user_id in self.cache:
            return list(self.cache[user_id])

        entries = sorted(
            (entry for entry in self._load_entries() if entry.user_id == user_id),
            key=lambda entry: entry.entry_date,
        )
        logger.debug(f"Loaded {len(entries)} entries for user {user_id}")
        self.cache[user_id] = entries
        return list(entries)

    def upsert_entry(self, entry: Union[Entry, EntryInput, dict]) -> Entry:
        """
        Insert an entry or update the existing one for the same user and day.

        Only the fields set on ``entry`` overwrite stored values. A new id and
        creation time are assigned to new entries, and the entry is marked
        complete once it carries both sleep and mood.
        """
        if isinstance(entry, dict):
            entry = EntryInput(**entry)
        updates = entry.model_dump(exclude_unset=True)

        df = self._read_frame()
        same_day = (df['user_id'] == updates['user_id']) & (df['entry_date'] == updates['entry_date'])
        existing = None
        for index in df.index[same_day]:
            try:
                existing = _row_to_entry(df.loc[index])
                break
            except ValueError as e:
                logger.warning(f"Replacing unreadable entry row {index} in {self.entries_file}: {str(e)}")

        now = datetime.now(timezone.utc).isoformat()
        merged = existing.model_dump() if existing is not None else {}
        merged.update(updates)
        merged['id'] = (existing.id if existing is not None else None) or merged.get('id') or uuid.uuid4().hex
        merged['created_at'] = (existing.created_at if existing is not None else None) or now

        complete = (finite_or_none(merged.get('sleep_hours')) is not None
                    and finite_or_none(merged.get('mood')) is not None)
        merged['is_complete'] = complete
        merged['completed_at'] = (merged.get('completed_at') or now) if complete else None

        saved = Entry(**merged)
        # Rows that could not be parsed are written back untouched
        saved_row = pd.DataFrame([_entry_to_row(saved)], columns=ENTRY_COLUMNS)
        remaining = df[~same_day]
        df = pd.concat([remaining, saved_row], ignore_index=True) if not remaining.empty else saved_row
        df.to_csv(self.entries_file, index=False)

        # Any cached history is stale once the file is rewritten
        self.cache.clear()
        logger.debug(f"Upserted entry {saved.id} for user {saved.user_id} on {saved.entry_date}")
        return saved
