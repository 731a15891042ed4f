"""Tests renderers HTML — BEM, échappement, sélection, attributs d'interactivité."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cms_blocks.renderer.base import BlockRenderProps
from cms_blocks.renderer.html import (
    default_html_renderers, interactive_attrs, render_content_html, render_hero_block, render_text_block,
)


CONTENT = {
    "_tree": [
        {"id": "h1", "type": "hero"},
        {"id": "c1", "type": "columns", "children": [{"id": "t1", "type": "text"}, {"id": "i1", "type": "image"}]},
    ],
    "_values": {
        "h1": {"title": {"$i18n": "Bienvenue"}, "cta_label": "Essayer", "cta_href": "/demo", "alignment": "left"},
        "c1": {"column_count": 2},
        "t1": {"body": "Premier.\n\nSecond."},
        "i1": {"alt": "Logo", "caption": "Légende"},
    },
    "_data": {"i1": {"url": "/assets/logo.png"}},
}


# ── Renderers ────────────────────────────────────────────────────────────────

def test_default_renderers():
    assert set(default_html_renderers().block_names()) == {"hero", "text", "columns", "image"}


def test_hero_bem_classes():
    html = render_hero_block(BlockRenderProps(id="h1", type="hero", values={"title": "Salut"}))
    assert 'class="hero hero--center"' in html
    assert '<h1 class="hero__title">Salut</h1>' in html
    assert "hero__cta" not in html


def test_hero_escapes_values():
    html = render_hero_block(BlockRenderProps(id="h1", type="hero", values={"title": "<script>"}))
    assert "&lt;script&gt;" in html
    assert "<script>" not in html


def test_text_paragraphs():
    html = render_text_block(BlockRenderProps(id="t1", type="text", values={"body": "A\n\nB\n\n  "}))
    assert html.count("<p>") == 2


# ── Attributs ────────────────────────────────────────────────────────────────

def test_attrs_passive():
    attrs = interactive_attrs(BlockRenderProps(id="h1", type="hero"))
    assert attrs == 'data-block-id="h1"'


def test_attrs_interactive_selected():
    attrs = interactive_attrs(BlockRenderProps(id="h1", type="hero", interactive=True, is_selected=True))
    assert 'role="button"' in attrs
    assert 'tabindex="0"' in attrs
    assert 'aria-pressed="true"' in attrs


# ── Contenu complet ──────────────────────────────────────────────────────────

def test_render_content():
    html = render_content_html(CONTENT)
    assert "Bienvenue" in html and "$i18n" not in html
    assert 'class="hero hero--left"' in html
    assert 'class="columns columns--2"' in html
    assert html.count('class="columns__col"') == 2
    assert 'src="/assets/logo.png"' in html
    assert "Légende" in html
    assert html.index("Premier.") < html.index("logo.png")


def test_render_selected_block():
    html = render_content_html(CONTENT, selected_block_id="t1")
    assert 'class="text block--selected"' in html
    assert html.count("block--selected") == 1


def test_render_interactive_keeps_root_element():
    passive = render_content_html(CONTENT)
    interactive = render_content_html(CONTENT, on_block_click=lambda block_id: None)
    assert interactive.count("<section") == passive.count("<section") == 1
    assert interactive.count('role="button"') == 4
    assert 'role="button"' not in passive


def test_render_skips_unknown_blocks():
    html = render_content_html({"_tree": [{"id": "x", "type": "carousel"}], "_values": {}})
    assert html == ""
