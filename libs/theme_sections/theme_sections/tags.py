"""
Tag resolver : normalisation des tags internes et matching des pages taguées.

Format interne "#ghost-card" ↔ slug API "hash-ghost-card".
Une page sans `tags` ne matche jamais (pas de wildcard).
"""
import re
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

_GHOST_CARD_RE = re.compile(r"^ghost-cards?-?(\d+)?$")
_SUFFIX_RE = re.compile(r"(\d+)$")


class PageTag(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    slug: Optional[str] = None
    visibility: Optional[str] = None


class ContentPage(BaseModel):
    """Page/post fourni par la source de contenu externe (lecture seule)."""
    model_config = ConfigDict(extra="allow")

    id: str = ""
    title: str = ""
    slug: str = ""
    url: str = ""
    html: Optional[str] = None
    excerpt: Optional[str] = None
    feature_image: Optional[str] = None
    feature_image_alt: Optional[str] = None
    tags: Optional[List[PageTag]] = Field(default=None)

    def tag_classes(self) -> str:
        return " ".join(f"tag-{t.slug}" for t in (self.tags or []) if t.slug)


def format_internal_tag(value: Any) -> str:
    """
    "Ghost-Cards-2" → "#ghost-card-2", "news" → "#news", "  ##  " → "".
    Chaîne vide = tag non défini, jamais un wildcard.
    """
    if not isinstance(value, str):
        return ""
    stripped = value.strip().lstrip("#")
    if not stripped:
        return ""
    match = _GHOST_CARD_RE.match(stripped.lower())
    if match:
        suffix = match.group(1)
        return f"#ghost-card-{suffix}" if suffix else "#ghost-card"
    return f"#{stripped}"


def to_api_tag_slug(tag: str) -> str:
    if tag.startswith("#"):
        return "hash-" + tag[1:]
    return tag


def page_has_tag(page: ContentPage, tag_slug: str) -> bool:
    if not page.tags:
        return False
    return any(t.slug == tag_slug for t in page.tags)


def _visible(page: ContentPage, tag_slug: str, hide_tag_slug: Optional[str]) -> bool:
    if not page_has_tag(page, tag_slug):
        return False
    return not (hide_tag_slug and page_has_tag(page, hide_tag_slug))


def find_page_by_tag(
    pages: Iterable[ContentPage],
    tag_slug: str,
    hide_tag_slug: Optional[str] = None,
) -> Optional[ContentPage]:
    """Première page portant tag_slug et pas hide_tag_slug."""
    for page in pages:
        if _visible(page, tag_slug, hide_tag_slug):
            return page
    return None


def filter_pages_by_tag(
    pages: Iterable[ContentPage],
    tag_slug: str,
    hide_tag_slug: Optional[str] = None,
) -> List[ContentPage]:
    return [p for p in pages if _visible(p, tag_slug, hide_tag_slug)]


def resolve_tag(value: Any, fallback: str) -> str:
    """Tag normalisé du réglage, ou le tag par défaut de la section si vide."""
    return format_internal_tag(value) or fallback


def instance_suffix(instance_id: str) -> Optional[str]:
    """"ghost-cards-2" → "2", "hero" → None."""
    match = _SUFFIX_RE.search(instance_id)
    return match.group(1) if match else None
