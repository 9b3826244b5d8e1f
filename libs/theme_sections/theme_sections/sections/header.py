"""Section Header : navigation principale (logo, menu, recherche)."""
from ..context import RenderContext
from ..definition import SectionDefinition
from ..schema import CheckboxSetting, HeaderSetting, Padding, RadioSetting, SelectSetting, SettingOption, options

LAYOUT_CLASSES = {
    "Logo in the middle": "is-layout-middle",
    "Logo on the left": "is-layout-left",
    "Stacked": "is-layout-stacked",
}
STICKY_CLASSES = {
    "Always": "is-sticky-always",
    "Scroll up": "is-sticky-scroll-up",
    "Never": "",
}


def build_view(config: dict, context: RenderContext) -> dict:
    classes = ["gh-navigation", LAYOUT_CLASSES.get(config.get("navigationLayout"), "is-layout-middle")]
    sticky = STICKY_CLASSES.get(config.get("stickyHeader"), "is-sticky-scroll-up")
    if sticky:
        classes.append(sticky)
    if config.get("typographyCase") == "uppercase":
        classes.append("is-uppercase")
    return {
        "section_classes": " ".join(classes),
        "search_enabled": config.get("searchEnabled") is not False,
    }


header_definition = SectionDefinition(
    id="header",
    label="Header",
    description="Main navigation header with logo, menu, and search",
    category="header",
    default_padding=Padding(top=0, bottom=0),
    template="sections/header.html.j2",
    build_view=build_view,
    settings_schema=[
        HeaderSetting(id="appearance-header", label="Navigation"),
        SelectSetting(
            id="navigationLayout", label="Layout", default="Logo in the middle",
            options=[SettingOption(label=v, value=v) for v in LAYOUT_CLASSES],
            info="Choose how your logo and navigation items are arranged.",
        ),
        SelectSetting(id="stickyHeader", label="Sticky header", default="Scroll up",
                      options=options("Always", "Scroll up", "Never")),
        HeaderSetting(id="search-header", label="Search"),
        CheckboxSetting(id="searchEnabled", label="Show search icon", default=True),
        HeaderSetting(id="typography-header", label="Typography"),
        RadioSetting(id="typographyCase", label="Case", default="default", options=[
            SettingOption(label="Case sensitive", value="default"),
            SettingOption(label="Uppercase", value="uppercase"),
        ]),
    ],
)
