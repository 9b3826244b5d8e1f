"""
Sections intégrées : liste statique d'enregistrement (pas de découverte disque).
"""
from .announcement_bar import announcement_bar_definition
from .ghost_cards import ghost_cards_definition
from .ghost_grid import ghost_grid_definition
from .header import header_definition
from .hero import hero_definition
from .image_with_text import image_with_text_definition

# Ordre = ordre d'enregistrement = ordre du catalogue
BUILTIN_SECTIONS = (
    hero_definition,
    ghost_cards_definition,
    ghost_grid_definition,
    image_with_text_definition,
    announcement_bar_definition,
    header_definition,
)

__all__ = [
    "BUILTIN_SECTIONS",
    "hero_definition", "ghost_cards_definition", "ghost_grid_definition",
    "image_with_text_definition", "announcement_bar_definition", "header_definition",
]
