"""
Section Ghost cards : pages taguées affichées en cartes.

Priorité : pages portant le tag (3 max) → cartes manuelles → placeholder
"Waiting for tagged pages" (tag sans page = état vide, pas une erreur).
"""
from ..context import RenderContext
from ..definition import SectionDefinition
from ..schema import Padding, TextSetting
from ..tags import filter_pages_by_tag, instance_suffix, resolve_tag, to_api_tag_slug, format_internal_tag
from .common import (
    article, card_block, card_color_settings, cards_section_style, cards_with_content,
    card_palette, header_classes, header_settings, intro, padding_settings, section_padding,
)

TAG_BASE = "#ghost-card"
HIDE_TAG = "#cards-hide"
MAX_PAGES = 3


def build_view(config: dict, context: RenderContext) -> dict:
    padding = section_padding(config, context)
    tag = resolve_tag(config.get("ghostPageTag"), TAG_BASE)
    show_header = config.get("showHeader") is not False

    matching = filter_pages_by_tag(context.pages, to_api_tag_slug(tag), to_api_tag_slug(HIDE_TAG))
    cards = cards_with_content(config.get("cards"))
    texts = intro(config)

    if matching:
        state = "pages"
    elif cards or texts["heading"] or texts["subheading"]:
        state = "cards"
    else:
        state = "placeholder"

    return {
        "state": state,
        "section_classes": " ".join(header_classes(config)),
        "section_style": cards_section_style(padding, card_palette(config)),
        "show_header": show_header,
        "tag": tag,
        "hide_tag": HIDE_TAG,
        "articles": [article(p) for p in matching[:MAX_PAGES]],
        "cards": cards,
        "heading": texts["heading"],
        "subheading": texts["subheading"],
    }


def instance_tag(config: dict, instance_id: str) -> dict:
    """
    "ghost-cards-2" → "#ghost-card-2" tant que le tag est vide ou resté sur la base.
    Un tag personnalisé est seulement normalisé.
    """
    suffix = instance_suffix(instance_id)
    default_tag = f"{TAG_BASE}-{suffix}" if suffix else TAG_BASE
    normalized = format_internal_tag(config.get("ghostPageTag"))
    if not normalized or (suffix and normalized == TAG_BASE):
        normalized = default_tag
    return {**config, "ghostPageTag": normalized}


ghost_cards_definition = SectionDefinition(
    id="ghostCards",
    label="Ghost cards",
    description="Show tagged Ghost pages as a row of cards.",
    category="template",
    default_padding=Padding(top=32, bottom=32, left=0, right=0),
    template="sections/ghost_cards.html.j2",
    hide_tag=HIDE_TAG,
    build_view=build_view,
    instance_hook=instance_tag,
    settings_schema=[
        TextSetting(id="ghostPageTag", label="Ghost page tag", default=TAG_BASE,
                    info="Pages with this tag are shown as cards"),
        *header_settings(show_header=True, alignment="left"),
        *card_color_settings(),
        *padding_settings(),
    ],
    blocks_schema=[card_block()],
)
