# rythm/core/reporting/csv_export.py
"""
CSV export of entry history.

Columns are ``date,sleep_hours,mood,note``; sleep is written in the
``7h 30m`` form used in the app.
"""

import logging
import os
from typing import List, Optional, Sequence

import pandas as pd

from rythm.core.models.data_models import Entry
from rythm.utils.numeric import finite_or_none
from rythm.utils.sleep_hours import format_sleep_hours, parse_sleep_hours

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ['date', 'sleep_hours', 'mood', 'note']


def entries_to_frame(entries: Sequence[Entry]) -> pd.DataFrame:
    rows = []
    for entry in entries:
        mood = finite_or_none(entry.mood)
        rows.append({
            'date': entry.entry_date,
            'sleep_hours': format_sleep_hours(entry.sleep_hours),
            'mood': str(int(mood)) if mood is not None else '',
            'note': entry.note or '',
        })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_entries_csv(entries: Sequence[Entry], path: str) -> Optional[str]:
    """
    Write entries to ``path`` as CSV.

    Returns the written path, or None when there is nothing to export.
    """
    if not entries:
        logger.info("No entries to export")
        return None

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    entries_to_frame(entries).to_csv(path, index=False, lineterminator='\n')
    logger.info(f"Exported {len(entries)} entries to {path}")
    return path


def read_entries_csv(path: str, user_id: str) -> List[Entry]:
    """Read a file written by export_entries_csv back into entries for ``user_id``"""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    missing = [column for column in EXPORT_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"CSV file {path} is missing columns: {', '.join(missing)}")

    entries = []
    for _, row in df.iterrows():
        mood_text = row['mood'].strip()
        entries.append(Entry(
            user_id=user_id,
            entry_date=row['date'],
            sleep_hours=parse_sleep_hours(row['sleep_hours']),
            mood=int(mood_text) if mood_text else None,
            note=row['note'] or None,
        ))
    return entries
