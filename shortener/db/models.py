"""
Database Models for URL Shortener Service

This module defines the SQLModel schema for UrlMapping, the only persisted
entity: the association between a short code and the original URL.

Design Decisions:
- short_code is stored in the `short_url` column with a unique index; the
  index is what arbitrates collisions between concurrent inserts
- long_url is unbounded TEXT and is not unique (several codes may point
  at the same URL)
- Rows are written once and never updated or deleted
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text, func
from sqlmodel import Field, SQLModel

SHORT_CODE_LENGTH = 8


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UrlMapping(SQLModel, table=True):
    """
    Table storing URL shortening mappings.

    Fields:
    - id: Auto-incrementing surrogate key
    - short_code: Unique 8-character base62 code (column `short_url`)
    - long_url: The URL that was shortened
    - created_at: Timestamp when the mapping was created
    """
    __tablename__ = "url_mappings"

    id: Optional[int] = Field(default=None, primary_key=True)
    short_code: str = Field(
        sa_column=Column(
            "short_url",
            String(SHORT_CODE_LENGTH),
            nullable=False,
            unique=True,
        ),
        max_length=SHORT_CODE_LENGTH,
    )
    long_url: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        ),
    )
