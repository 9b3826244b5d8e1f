"""Section Ghost grid : deux pages taguées côte à côte (colonne gauche / droite)."""
from ..context import RenderContext
from ..definition import SectionDefinition
from ..sanitizers import clamp, is_number
from ..schema import CheckboxSetting, Padding, RangeSetting, TextSetting
from ..tags import find_page_by_tag, resolve_tag, to_api_tag_slug
from .common import (
    article, card_block, card_color_settings, cards_section_style, cards_with_content,
    card_palette, header_classes, header_settings, intro, section_padding,
)

LEFT_TAG = "#ghost-grid-1"
RIGHT_TAG = "#ghost-grid-2"
HIDE_TAG = "#grid-hide"
EMPTY_CARD = {"title": "", "description": "", "buttonText": "", "buttonHref": ""}


def _column(page, tag: str) -> dict:
    if page is None:
        return {"page": None, "tag": tag}
    return {"page": article(page), "tag": tag}


def build_view(config: dict, context: RenderContext) -> dict:
    padding = section_padding(config, context)
    gap = config.get("columnGap")
    gap = round(clamp(gap, 0, 100)) if is_number(gap) else 20
    stack = config.get("stackOnMobile") is not False

    classes = header_classes(config)
    if not stack:
        classes.append("gd-ghost-grid-no-stack")

    left_tag = resolve_tag(config.get("leftColumnTag"), LEFT_TAG)
    right_tag = resolve_tag(config.get("rightColumnTag"), RIGHT_TAG)
    hide_slug = to_api_tag_slug(HIDE_TAG)
    left = find_page_by_tag(context.pages, to_api_tag_slug(left_tag), hide_slug)
    right = find_page_by_tag(context.pages, to_api_tag_slug(right_tag), hide_slug)

    raw_cards = config.get("cards")
    cards = cards_with_content(raw_cards[:2] if isinstance(raw_cards, list) else [])
    texts = intro(config)

    if left or right:
        state = "pages"
    elif cards or texts["heading"] or texts["subheading"]:
        state = "cards"
    else:
        state = "placeholder"

    style = cards_section_style(padding, card_palette(config)) + f"; --gd-ghost-grid-gap: {gap}px"
    return {
        "state": state,
        "section_classes": " ".join(classes),
        "section_style": style,
        "show_header": config.get("showHeader") is not False,
        "left_tag": left_tag,
        "right_tag": right_tag,
        "columns": [_column(left, left_tag), _column(right, right_tag)],
        "cards": cards,
        "heading": texts["heading"],
        "subheading": texts["subheading"],
    }


ghost_grid_definition = SectionDefinition(
    id="ghostGrid",
    label="Ghost grid",
    description="Show two Ghost pages side-by-side as feature cards.",
    category="template",
    default_padding=Padding(top=32, bottom=32, left=0, right=0),
    template="sections/ghost_grid.html.j2",
    hide_tag=HIDE_TAG,
    build_view=build_view,
    settings_schema=[
        TextSetting(id="leftColumnTag", label="Left column tag", default=LEFT_TAG,
                    info="Tag for left column page"),
        TextSetting(id="rightColumnTag", label="Right column tag", default=RIGHT_TAG,
                    info="Tag for right column page"),
        *header_settings(show_header=False, alignment="center"),
        RangeSetting(id="columnGap", label="Column gap", min=0, max=100, step=1, default=20, unit="px"),
        CheckboxSetting(id="stackOnMobile", label="Stack on mobile", default=True),
        *card_color_settings(),
    ],
    blocks_schema=[card_block(limit=2, default=[dict(EMPTY_CARD), dict(EMPTY_CARD)])],
)
