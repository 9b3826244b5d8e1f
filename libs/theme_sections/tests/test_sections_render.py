"""Tests rendu des sections intégrées : états, échappement, parité aperçu/export."""
import pytest

from theme_sections import Padding, RenderContext, build_instance, render_section
from theme_sections.sections import (
    BUILTIN_SECTIONS, announcement_bar_definition, ghost_cards_definition, ghost_grid_definition,
    header_definition, hero_definition, image_with_text_definition,
)

from conftest import make_page


def _render(definition, renderer, config=None, pages=(), instance_id=None, padding=None):
    instance = build_instance(definition, instance_id or definition.id, config)
    context = RenderContext(
        section_id=instance.id,
        padding=padding or definition.default_padding,
        pages=tuple(pages),
    )
    return render_section(definition, instance.config, context, renderer)


# ── Hero ────────────────────────────────────────────────────────────────────

def test_hero_placeholders(preview):
    html = _render(hero_definition, preview, instance_id="hero-defalt-1")
    assert 'data-section-id="hero-defalt-1"' in html
    assert "Enter heading text" in html
    assert "gd-hero-placeholder" in html
    assert 'href="https://example.com"' in html


def test_hero_escapes_text(preview):
    html = _render(hero_definition, preview, {"placeholder": {"title": "<script>alert(1)</script>"}})
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_hero_neutralizes_javascript_href(preview):
    html = _render(hero_definition, preview, {"placeholder": {"buttonText": "Go", "buttonHref": "javascript:alert(1)"}})
    assert 'href="#"' in html
    assert "javascript:" not in html


def test_hero_hide_button(preview):
    assert 'class="gd-hero-button' not in _render(hero_definition, preview, {"showButton": False})
    assert 'class="gd-hero-button' in _render(hero_definition, preview)


def test_hero_regular_width_and_padding(preview):
    html = _render(hero_definition, preview, {"contentWidth": "regular"}, padding=Padding(top=48, bottom=16))
    assert "gd-hero-section-regular" in html
    assert "--gd-hero-padding-top: 48px" in html
    assert "--gd-hero-card-radius: 24px" in html


# ── Ghost cards ─────────────────────────────────────────────────────────────

def test_ghost_cards_placeholder_without_pages(preview):
    html = _render(ghost_cards_definition, preview)
    assert "Waiting for tagged pages" in html
    assert "<code>#ghost-card</code>" in html
    assert "<code>#cards-hide</code>" in html


def test_ghost_cards_tagged_pages(preview, tagged_pages):
    html = _render(ghost_cards_definition, preview, pages=tagged_pages)
    assert "<p>Premier</p>" in html
    assert "Carte 1" in html
    assert "Carte 2" not in html
    assert "Waiting for tagged pages" not in html


def test_ghost_cards_limited_to_three_pages(preview):
    pages = [make_page(f"Page {i}", "#ghost-card") for i in range(5)]
    html = _render(ghost_cards_definition, preview, pages=pages)
    assert html.count("<article") == 3


def test_ghost_cards_instance_tag(preview):
    pages = [make_page("Deux", "#ghost-card-2"), make_page("Base", "#ghost-card")]
    html = _render(ghost_cards_definition, preview, pages=pages, instance_id="ghost-cards-2")
    assert "Deux" in html
    assert "Base" not in html


def test_ghost_cards_manual_cards(preview):
    html = _render(ghost_cards_definition, preview, {
        "heading": "Nos offres",
        "cards": [{"title": "Offre A", "buttonText": "Voir", "buttonHref": "offres.example.com"}, {"title": " "}],
    })
    assert "Nos offres" in html
    assert "Offre A" in html
    assert 'href="https://offres.example.com"' in html
    assert html.count("gd-ghost-card-body") == 1


def test_ghost_cards_colors_and_header(preview):
    html = _render(ghost_cards_definition, preview, {"backgroundColor": "#ABC", "showHeader": False})
    assert "--gd-ghost-cards-background: #aabbcc" in html
    assert (
        "--gd-ghost-cards-padding-top: 32px; --gd-ghost-cards-padding-bottom: 32px; "
        "--gd-ghost-cards-padding-left: 0px; --gd-ghost-cards-padding-right: 0px; "
        "--gd-ghost-cards-background: #aabbcc; --gd-ghost-cards-text: #151515"
    ) in html
    assert "gd-ghost-cards-hide-header" in html


# ── Ghost grid ──────────────────────────────────────────────────────────────

def test_ghost_grid_placeholder(preview):
    html = _render(ghost_grid_definition, preview)
    assert "Left column" in html and "Right column" in html
    assert "--gd-ghost-grid-gap: 20px" in html


def test_ghost_grid_one_column_filled(preview, tagged_pages):
    config = {"stackOnMobile": False, "columnGap": 40, "showHeader": True}
    html = _render(ghost_grid_definition, preview, config, pages=tagged_pages)
    assert "Gauche" in html
    assert "Column placeholder" in html
    assert "<code>#ghost-grid-2</code>" in html
    assert "gd-ghost-grid-no-stack" in html
    assert "--gd-ghost-grid-gap: 40px" in html


def test_ghost_grid_hides_page_titles_by_default(preview, tagged_pages):
    html = _render(ghost_grid_definition, preview, pages=tagged_pages)
    assert "Gauche" not in html
    assert "<p>Contenu</p>" in html


def test_ghost_grid_cards_state(preview):
    html = _render(ghost_grid_definition, preview, {"cards": [{"title": "Un"}, {"title": "Deux"}]})
    assert "Un" in html and "Deux" in html
    assert "Left column" not in html


# ── Image with text ─────────────────────────────────────────────────────────

def test_image_with_text_placeholder(preview):
    html = _render(image_with_text_definition, preview, {"aspectRatio": "16:9"}, instance_id="image-with-text-2")
    assert "<code>#image-with-text-2</code>" in html
    assert "aspect-ratio: 16 / 9" in html


def test_image_with_text_page(preview):
    pages = [make_page("Atelier", "#image-with-text", feature_image="https://img.example.com/a.jpg")]
    html = _render(image_with_text_definition, preview, {"imagePosition": "right", "imageWidth": "2/3"}, pages=pages)
    assert 'src="https://img.example.com/a.jpg"' in html
    assert "gh-image-with-text-reverse" in html
    assert "flex: 0 0 66.666%" in html
    assert 'style="padding-top: 32px; padding-bottom: 32px"' in html
    assert "Atelier" in html


def test_image_with_text_hide_tag(preview):
    pages = [make_page("Cachée", "#image-with-text", "#image-text-hide")]
    assert "Cachée" not in _render(image_with_text_definition, preview, pages=pages)


# ── Announcement bar / header ───────────────────────────────────────────────

def test_announcement_preview_text(preview):
    html = _render(announcement_bar_definition, preview)
    assert "Tag #announcement-bar to a published Ghost page." in html
    assert "--gd-announcement-background: #ac1e3e" in html
    assert "--gd-announcement-padding-top: 8px" in html


def test_announcement_tagged_page(preview, tagged_pages):
    html = _render(announcement_bar_definition, preview, {"typographyCase": "uppercase"}, pages=tagged_pages)
    assert "Soldes" in html
    assert "gd-announcement-uppercase" in html


def test_header_classes(preview):
    html = _render(header_definition, preview, {"navigationLayout": "Stacked", "stickyHeader": "Never"})
    assert "is-layout-stacked" in html
    assert "is-sticky" not in html
    assert "gh-search" in html


def test_header_without_search(preview):
    html = _render(header_definition, preview, {"searchEnabled": False, "stickyHeader": "Always"})
    assert "gh-search" not in html
    assert "is-sticky-always" in html


# ── Parité aperçu / export ──────────────────────────────────────────────────

@pytest.mark.parametrize("definition", BUILTIN_SECTIONS, ids=lambda d: d.id)
def test_preview_matches_export_defaults(definition, preview, export):
    assert _render(definition, preview) == _render(definition, export)


@pytest.mark.parametrize("definition", BUILTIN_SECTIONS, ids=lambda d: d.id)
def test_preview_matches_export_with_pages(definition, preview, export, tagged_pages):
    config = {"heading": "Titre", "cards": [{"title": "A"}]}
    assert _render(definition, preview, config, tagged_pages) == _render(definition, export, config, tagged_pages)
