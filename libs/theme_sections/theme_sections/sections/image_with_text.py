"""
Section Image with text : image à la une d'une page taguée à côté de son contenu.

Sans page taguée, un placeholder décrit le tag à poser.
"""
from ..context import RenderContext
from ..definition import SectionDefinition
from ..sanitizers import build_padding_style, clamp, is_number, to_px
from ..schema import CheckboxSetting, HeaderSetting, Padding, RangeSetting, SelectSetting, TextSetting, options
from ..tags import find_page_by_tag, format_internal_tag, instance_suffix, resolve_tag, to_api_tag_slug
from .common import article, section_padding

TAG_BASE = "#image-with-text"
HIDE_TAG = "#image-text-hide"

ASPECT_RATIOS = {"1:1": "1 / 1", "3:4": "3 / 4", "4:3": "4 / 3", "16:9": "16 / 9", "2:3": "2 / 3"}
IMAGE_WIDTHS = {"1/2": "50%", "2/3": "66.666%", "3/4": "75%"}
TEXT_ALIGNMENTS = {"top": "flex-start", "middle": "center", "bottom": "flex-end"}
HEADING_SIZES = {"small": "1.5rem", "normal": "2rem", "large": "2.5rem", "x-large": "3rem"}


def build_view(config: dict, context: RenderContext) -> dict:
    padding = section_padding(config, context)
    tag = resolve_tag(config.get("ghostPageTag"), TAG_BASE)
    position = "right" if config.get("imagePosition") == "right" else "left"
    alignment = config.get("headerAlignment")
    alignment = alignment if alignment in ("left", "right") else "center"
    container = config.get("containerWidth")
    container = container if container in ("narrow", "full") else "default"

    aspect = ASPECT_RATIOS.get(config.get("aspectRatio"), "")
    aspect_style = f"aspect-ratio: {aspect}; object-fit: cover;" if aspect else ""
    image_width = IMAGE_WIDTHS.get(config.get("imageWidth"), "50%")
    gap = config.get("gap")
    gap = clamp(gap, 0, 100) if is_number(gap) else 32
    radius = to_px(config.get("imageBorderRadius"), 0, 96)

    classes = ["gh-image-with-text", "gh-outer"]
    if position == "right":
        classes.append("gh-image-with-text-reverse")
    if container != "default":
        classes.append(f"gd-container-{container}")

    page = find_page_by_tag(context.pages, to_api_tag_slug(tag), to_api_tag_slug(HIDE_TAG))

    return {
        "page": article(page) if page else None,
        "tag": tag,
        "section_classes": " ".join(classes),
        "section_style": build_padding_style({"top": padding["top"], "bottom": padding["bottom"]}),
        "inner_class": "" if container == "full" else "gh-inner",
        "position_class": "gd-image-right" if position == "right" else "",
        "content_style": f"align-items: {TEXT_ALIGNMENTS.get(config.get('textAlignment'), 'center')}; gap: {gap}px;",
        "image_container_style": f"flex: 0 0 {image_width}; max-width: {image_width};",
        "image_style": f"border-radius: {radius}px; {aspect_style}".strip(),
        "placeholder_image_style": f"border-radius: {radius}px; {aspect_style or 'height: 300px;'}",
        "show_header": config.get("showHeader") is not False,
        "header_class": f"gd-header-{alignment}",
        "heading_style": f"font-size: {HEADING_SIZES.get(config.get('headingSize'), '2rem')};",
    }


def instance_tag(config: dict, instance_id: str) -> dict:
    """"image-with-text-3" → "#image-with-text-3" tant que le tag est resté sur la base."""
    suffix = instance_suffix(instance_id)
    normalized = format_internal_tag(config.get("ghostPageTag"))
    if not normalized or normalized == TAG_BASE:
        normalized = f"{TAG_BASE}-{suffix}" if suffix else TAG_BASE
    return {**config, "ghostPageTag": normalized}


image_with_text_definition = SectionDefinition(
    id="image-with-text",
    label="Image with Text",
    description="Display an image alongside text content with optional call-to-action.",
    category="template",
    premium=True,
    default_padding=Padding(top=32, bottom=32, left=0, right=0),
    template="sections/image_with_text.html.j2",
    hide_tag=HIDE_TAG,
    build_view=build_view,
    instance_hook=instance_tag,
    settings_schema=[
        TextSetting(id="ghostPageTag", label="Ghost page tag", default=TAG_BASE,
                    info="Tag to fetch content from"),
        SelectSetting(id="imagePosition", label="Image position", default="left",
                      options=options("left", "right")),
        CheckboxSetting(id="showHeader", label="Show heading", default=True),
        SelectSetting(id="headerAlignment", label="Heading alignment", default="center",
                      options=options("left", "center", "right")),
        HeaderSetting(id="image-header", label="Image"),
        SelectSetting(id="aspectRatio", label="Aspect ratio", default="default",
                      options=options("default", "1:1", "3:4", "4:3", "16:9", "2:3")),
        RangeSetting(id="imageBorderRadius", label="Image radius", min=0, max=96, step=1, default=0, unit="px"),
        SelectSetting(id="imageWidth", label="Image width", default="1/2",
                      options=options("1/2", "2/3", "3/4")),
        HeaderSetting(id="layout-header", label="Layout"),
        SelectSetting(id="containerWidth", label="Container width", default="default",
                      options=options("default", "narrow", "full")),
        RangeSetting(id="gap", label="Gap", min=0, max=100, step=4, default=32, unit="px"),
        SelectSetting(id="textAlignment", label="Text alignment", default="middle",
                      options=options("top", "middle", "bottom")),
        SelectSetting(id="headingSize", label="Heading size", default="normal",
                      options=options("small", "normal", "large", "x-large")),
    ],
)
