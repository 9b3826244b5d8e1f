"""SQLite : init + session + CRUD helpers"""
import json, os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, ThemeDB

DATA_DIR = Path(__file__).parent.parent / "data"
DATA_DIR.mkdir(exist_ok=True)

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "themes.db"))
ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db():
    Base.metadata.create_all(bind=ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)

def jo(s: str) -> dict:
    return json.loads(s or "{}")


# ── Theme ──
def db_create_theme(db: Session, obj: ThemeDB) -> ThemeDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_theme(db: Session, theme_id: str) -> Optional[ThemeDB]:
    return db.query(ThemeDB).filter_by(theme_id=theme_id).first()

def db_list_themes(db: Session) -> List[ThemeDB]:
    return db.query(ThemeDB).order_by(ThemeDB.created_at.desc()).all()

def db_update_theme(db: Session, theme: ThemeDB, **kwargs) -> ThemeDB:
    for k, v in kwargs.items():
        setattr(theme, k, v)
    theme.updated_at = datetime.utcnow()
    db.commit(); db.refresh(theme); return theme

def db_delete_theme(db: Session, theme: ThemeDB) -> None:
    db.delete(theme); db.commit()
