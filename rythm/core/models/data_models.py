# rythm/core/models/data_models.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from rythm.utils.dates import parse_entry_date


def _validate_entry_date(v):
    # Raises ValueError for anything that is not a real YYYY-MM-DD date
    parse_entry_date(v)
    return v


# Entry Models
class Entry(BaseModel):
    """One user's log for one calendar day. Never mutated by the analytics layer."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    user_id: str
    entry_date: str
    sleep_hours: Optional[float] = None
    mood: Optional[int] = None
    note: Optional[str] = None
    tags: Optional[List[str]] = None
    is_complete: bool = False
    completed_at: Optional[str] = None
    created_at: Optional[str] = None

    @field_validator('entry_date')
    @classmethod
    def validate_entry_date(cls, v):
        return _validate_entry_date(v)


class EntryInput(BaseModel):
    """Payload accepted when a user logs or edits a day."""

    user_id: str
    entry_date: str
    sleep_hours: Optional[float] = Field(None, ge=0, le=12)
    mood: Optional[int] = Field(None, ge=1, le=5)
    note: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator('entry_date')
    @classmethod
    def validate_entry_date(cls, v):
        return _validate_entry_date(v)

    @field_validator('tags')
    @classmethod
    def normalize_tags(cls, v):
        if v is None:
            return v
        return [tag.strip().lower() for tag in v if tag and tag.strip()]
