"""
Thèmes : CRUD du document, backup/restore, aperçu et export.

Un document est toujours chargé + préparé (migration, réconciliation) avant
d'être stocké ; un document malformé → 422 et rien n'est écrit.
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from theme_sections import (
    ContentPage, ContentSourceError, MalformedDocumentError, SectionRegistry, ThemeDocument, Tier,
    create_backup, create_default_document, dump_backup, dump_document, export_theme,
    load_document, parse_backup, prepare_document, render_preview,
)
from theme_sections.config import load_settings
from theme_sections.content_client import client_from_settings
from theme_sections.renderer import PreviewRenderer
from theme_sections.router import get_preview_renderer, get_registry

from ...database import (
    db_create_theme, db_delete_theme, db_get_theme, db_list_themes, db_update_theme, get_db, jd, jo,
)
from ...models import ExportOut, ThemeCreate, ThemeDB, ThemeOut

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/themes", tags=["Themes"])


def _theme_or_404(db: Session, theme_id: str) -> ThemeDB:
    theme = db_get_theme(db, theme_id)
    if not theme:
        raise HTTPException(404, "Thème introuvable")
    return theme


def _load_or_422(data: Any) -> ThemeDocument:
    try:
        return prepare_document(load_document(data))
    except MalformedDocumentError as e:
        raise HTTPException(422, {"message": str(e), "errors": e.errors})


def _out(theme: ThemeDB, with_document: bool = True) -> ThemeOut:
    return ThemeOut(
        theme_id=theme.theme_id,
        name=theme.name,
        tier=theme.tier,
        created_at=theme.created_at,
        updated_at=theme.updated_at,
        document=jo(theme.document) if with_document else None,
    )


def _fetch_pages() -> List[ContentPage]:
    """Pages Ghost taguées si la source est configurée, sinon aucune (placeholders)."""
    client = client_from_settings(load_settings())
    if client is None:
        return []
    try:
        return client.fetch_pages()
    except ContentSourceError as e:
        raise HTTPException(502, f"Source de contenu indisponible : {e}")


# ── CRUD ──────────────────────────────────────────────────────────────────

@router.post("", response_model=ThemeOut, status_code=201)
def create_theme(body: ThemeCreate, db: Session = Depends(get_db)):
    document = _load_or_422(body.document) if body.document is not None else create_default_document()
    theme = db_create_theme(db, ThemeDB(name=body.name, tier=body.tier.value, document=jd(dump_document(document))))
    log.info("Thème créé : %s (%s)", theme.theme_id, theme.name)
    return _out(theme)


@router.get("", response_model=List[ThemeOut])
def list_themes(db: Session = Depends(get_db)):
    return [_out(t, with_document=False) for t in db_list_themes(db)]


@router.get("/{theme_id}", response_model=ThemeOut)
def get_theme(theme_id: str, db: Session = Depends(get_db)):
    return _out(_theme_or_404(db, theme_id))


@router.put("/{theme_id}/document", response_model=ThemeOut)
def update_document(theme_id: str, data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    theme = _theme_or_404(db, theme_id)
    document = _load_or_422(data)
    return _out(db_update_theme(db, theme, document=jd(dump_document(document))))


@router.delete("/{theme_id}")
def delete_theme(theme_id: str, db: Session = Depends(get_db)):
    db_delete_theme(db, _theme_or_404(db, theme_id))
    return {"deleted": theme_id}


# ── Backup / restore ──────────────────────────────────────────────────────

@router.get("/{theme_id}/backup")
def backup_theme(theme_id: str, db: Session = Depends(get_db)):
    theme = _theme_or_404(db, theme_id)
    return dump_backup(create_backup(load_document(jo(theme.document))))


@router.post("/{theme_id}/restore", response_model=ThemeOut)
def restore_theme(theme_id: str, data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    theme = _theme_or_404(db, theme_id)
    try:
        backup = parse_backup(data)
    except MalformedDocumentError as e:
        raise HTTPException(422, {"message": str(e), "errors": e.errors})
    document = prepare_document(backup.document)
    log.info("Thème %s restauré (backup du %s)", theme_id, backup.exportedAt)
    return _out(db_update_theme(db, theme, document=jd(dump_document(document))))


# ── Aperçu / export ───────────────────────────────────────────────────────

@router.get("/{theme_id}/preview/{page_key}", response_class=HTMLResponse)
def preview_page(
    theme_id: str,
    page_key: str,
    db: Session = Depends(get_db),
    registry: SectionRegistry = Depends(get_registry),
    renderer: PreviewRenderer = Depends(get_preview_renderer),
):
    theme = _theme_or_404(db, theme_id)
    document = load_document(jo(theme.document))
    if page_key not in document.pages:
        raise HTTPException(404, f"Page inconnue : {page_key}")
    composed = render_preview(document, page_key, registry, Tier(theme.tier), renderer, _fetch_pages())
    return HTMLResponse(content=composed.html)


@router.post("/{theme_id}/export", response_model=ExportOut)
def export(
    theme_id: str,
    db: Session = Depends(get_db),
    registry: SectionRegistry = Depends(get_registry),
):
    theme = _theme_or_404(db, theme_id)
    document = load_document(jo(theme.document))
    result = export_theme(document, registry, Tier(theme.tier), pages=_fetch_pages())
    log.info("Thème %s exporté : %d fichier(s)", theme_id, len(result.files))
    return ExportOut(
        files={path: data.decode("utf-8") for path, data in result.files.items()},
        skipped=result.skipped,
        warnings=result.warnings,
    )
