"""
THEME_SECTIONS : FastAPI app
Démarrer : uvicorn src.api.main:app --reload --port 8001
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from theme_sections.config import load_settings
from theme_sections.router import router as sections_router

from .routes import themes

logging.basicConfig(level=load_settings().log_level, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="THEME_SECTIONS — Sections de thème", version="0.1.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialisée (SQLite)")

    from theme_sections import default_registry
    registry = default_registry()
    log.info("Registre de sections : %d définition(s)", len(registry.list_all()))


@app.get("/health")
def health():
    return {"status": "ok", "service": "theme_sections", "version": "0.1.0"}


app.include_router(sections_router)
app.include_router(themes.router)
