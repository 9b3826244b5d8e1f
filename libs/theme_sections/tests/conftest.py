"""Fixtures communes : registre frais, backends de rendu, pages Ghost taguées."""
import pytest

from theme_sections import ContentPage, ExportRenderer, PreviewRenderer, build_default_registry


def make_page(title, *tags, html="<p>Contenu</p>", feature_image=None, **extra):
    return ContentPage(
        id=title.lower().replace(" ", "-"),
        title=title,
        slug=title.lower().replace(" ", "-"),
        html=html,
        feature_image=feature_image,
        tags=[{"name": t, "slug": "hash-" + t.lstrip("#") if t.startswith("#") else t} for t in tags],
        **extra,
    )


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def preview():
    return PreviewRenderer()


@pytest.fixture
def export():
    return ExportRenderer()


@pytest.fixture
def tagged_pages():
    return [
        make_page("Carte 1", "#ghost-card", html="<p>Premier</p>"),
        make_page("Carte 2", "#ghost-card", "#cards-hide"),
        make_page("Gauche", "#ghost-grid-1", feature_image="https://img.example.com/g.jpg"),
        make_page("Annonce", "#announcement-bar", html="<p>Soldes <a href='/s'>ici</a></p>"),
        make_page("Sans tag"),
    ]
