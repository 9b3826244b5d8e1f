"""
Data models : Theme (document de thème persisté)
SQLAlchemy (SQLite) + Pydantic v2
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from theme_sections import Tier

# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass

class ThemeDB(Base):
    __tablename__ = "themes"
    theme_id:   Mapped[str]      = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name:       Mapped[str]      = mapped_column(sa.String, nullable=False)
    tier:       Mapped[str]      = mapped_column(sa.String, default=Tier.FREE.value)
    document:   Mapped[str]      = mapped_column(sa.Text, default="{}")  # JSON ThemeDocument
    created_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

# ── API payloads ───────────────────────────────────────────────────────

class ThemeCreate(BaseModel):
    name: str = Field(min_length=1)
    tier: Tier = Tier.FREE
    document: Optional[Dict[str, Any]] = None

class ThemeOut(BaseModel):
    theme_id: str
    name: str
    tier: Tier
    created_at: datetime
    updated_at: datetime
    document: Optional[Dict[str, Any]] = None


class ExportOut(BaseModel):
    files: Dict[str, str]
    skipped: List[str] = []
    warnings: List[str] = []
