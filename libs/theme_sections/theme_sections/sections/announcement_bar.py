"""
Section Announcement bar : bandeau en tête de page.

Le contenu vient d'une page taguée #announcement-bar ; à défaut, previewText.
Padding unifié (top/bottom seulement).
"""
from ..context import RenderContext
from ..definition import SectionDefinition
from ..sanitizers import sanitize_hex, to_px
from ..schema import (
    CheckboxSetting, ColorSetting, HeaderSetting, Padding, RadioSetting,
    RangeSetting, SelectSetting, SettingOption, TextareaSetting, options,
)
from ..tags import find_page_by_tag, to_api_tag_slug
from .common import article

TAG = "#announcement-bar"
PREVIEW_TEXT = "Tag #announcement-bar to a published Ghost page."


def _pick(value, allowed, fallback: str) -> str:
    return value if value in allowed else fallback


def build_view(config: dict, context: RenderContext) -> dict:
    page = find_page_by_tag(context.pages, to_api_tag_slug(TAG))
    text = config.get("previewText")
    text = text.strip() if isinstance(text, str) else ""

    size = _pick(config.get("typographySize"), ("small", "large", "x-large"), "normal")
    weight = _pick(config.get("typographyWeight"), ("light", "bold"), "default")
    spacing = _pick(config.get("typographySpacing"), ("tight", "wide"), "regular")
    case = _pick(config.get("typographyCase"), ("uppercase",), "default")

    classes = [
        "gd-announcement-bar",
        f"gd-announcement-size-{size}",
        f"gd-announcement-weight-{weight}",
        f"gd-announcement-spacing-{spacing}",
    ]
    if case == "uppercase":
        classes.append("gd-announcement-uppercase")
    if config.get("underlineLinks") is not False:
        classes.append("gd-announcement-underline-links")

    divider = to_px(config.get("dividerThickness"), 0, 5)
    style = "; ".join([
        f"--gd-announcement-background: {sanitize_hex(config.get('backgroundColor'), '#ac1e3e')}",
        f"--gd-announcement-text: {sanitize_hex(config.get('textColor'), '#ffffff')}",
        f"--gd-announcement-divider: {divider}px",
        f"--gd-announcement-divider-color: {sanitize_hex(config.get('dividerColor'), '#e5e7eb')}",
        f"--gd-announcement-padding-top: {to_px(config.get('paddingTop'), context.padding.top, 100)}px",
        f"--gd-announcement-padding-bottom: {to_px(config.get('paddingBottom'), context.padding.bottom, 100)}px",
    ])

    return {
        "section_classes": " ".join(classes),
        "section_style": style,
        "inner_class": "gd-announcement-narrow" if config.get("width") == "narrow" else "gd-announcement-default",
        "page": article(page) if page else None,
        "preview_text": text or PREVIEW_TEXT,
        "tag": TAG,
    }


announcement_bar_definition = SectionDefinition(
    id="announcement-bar",
    label="Announcement Bar",
    description="A notification bar at the top of the page with customizable styling",
    category="header",
    default_padding=Padding(top=8, bottom=8),
    uses_unified_padding=True,
    template="sections/announcement_bar.html.j2",
    build_view=build_view,
    settings_schema=[
        HeaderSetting(id="content-header", label="Content"),
        TextareaSetting(id="previewText", label="Preview text", default=PREVIEW_TEXT),
        HeaderSetting(id="typography-header", label="Typography"),
        SelectSetting(id="typographySize", label="Size", default="normal",
                      options=options("small", "normal", "large", "x-large")),
        SelectSetting(id="typographyWeight", label="Weight", default="default",
                      options=options("light", "default", "bold")),
        SelectSetting(id="typographySpacing", label="Spacing", default="regular",
                      options=options("tight", "regular", "wide")),
        RadioSetting(id="typographyCase", label="Case", default="default", options=[
            SettingOption(label="Case sensitive", value="default"),
            SettingOption(label="Uppercase", value="uppercase"),
        ]),
        HeaderSetting(id="appearance-header", label="Appearance"),
        RadioSetting(id="width", label="Width", default="default", options=options("default", "narrow")),
        ColorSetting(id="backgroundColor", label="Background color", default="#ac1e3e"),
        ColorSetting(id="textColor", label="Text color", default="#ffffff"),
        CheckboxSetting(id="underlineLinks", label="Underline links", default=True),
        RangeSetting(id="dividerThickness", label="Divider", min=0, max=5, step=1, default=0, unit="px"),
        ColorSetting(id="dividerColor", label="Divider color", default="#e5e7eb"),
        HeaderSetting(id="padding-header", label="Padding"),
        RangeSetting(id="paddingTop", label="Top", min=0, max=100, step=1, default=8, unit="px"),
        RangeSetting(id="paddingBottom", label="Bottom", min=0, max=100, step=1, default=8, unit="px"),
    ],
)
