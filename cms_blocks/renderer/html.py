"""
Renderers HTML de référence — hero, text, columns, image.
Classes BEM, un élément racine par bloc ; l'interactivité est portée par des attributs
de cet élément (data-block-id, role, tabindex, aria-pressed), sans wrapper supplémentaire.
"""
from html import escape
from typing import Any, Optional

from .base import BlockRendererRegistry, BlockRenderProps
from .tree import render_block_tree


def _text(value: Any) -> str:
    return escape(str(value)) if value is not None else ""


def block_classes(props: BlockRenderProps, *classes: str) -> str:
    names = [c for c in classes if c]
    if props.is_selected:
        names.append("block--selected")
    return " ".join(names)


def interactive_attrs(props: BlockRenderProps) -> str:
    attrs = [f'data-block-id="{_text(props.id)}"']
    if props.interactive:
        attrs.append('role="button"')
        attrs.append('tabindex="0"')
        attrs.append(f'aria-pressed="{"true" if props.is_selected else "false"}"')
    return " ".join(attrs)


# ── Renderers blocs ─────────────────────────────────────────────────────────

def render_hero_block(props: BlockRenderProps) -> str:
    v = props.values
    align = v.get("alignment") or "center"
    style = f' style="background-image:url(\'{_text(v["bg_src"])}\')"' if v.get("bg_src") else ""

    badge_html = f'<span class="hero__badge">{_text(v["badge"])}</span>\n  ' if v.get("badge") else ""
    subtitle_html = f'\n  <p class="hero__subtitle">{_text(v["subtitle"])}</p>' if v.get("subtitle") else ""
    cta_html = ""
    if v.get("cta_label"):
        cta_html = f'\n  <a class="hero__cta btn btn--primary" href="{_text(v.get("cta_href") or "#")}">{_text(v["cta_label"])}</a>'

    return (f'<section class="{block_classes(props, "hero", f"hero--{align}")}" {interactive_attrs(props)}{style}>\n'
            f'  {badge_html}<h1 class="hero__title">{_text(v.get("title"))}</h1>{subtitle_html}{cta_html}\n'
            f'</section>')


def render_text_block(props: BlockRenderProps) -> str:
    body = props.values.get("body") or ""
    paragraphs = "\n".join(f"  <p>{_text(p)}</p>" for p in str(body).split("\n\n") if p.strip())
    return f'<div class="{block_classes(props, "text")}" {interactive_attrs(props)}>\n{paragraphs}\n</div>'


def render_columns_block(props: BlockRenderProps) -> str:
    count = props.values.get("column_count") or len(props.children) or 1
    cols = "\n".join(f'  <div class="columns__col">\n{child}\n  </div>' for child in props.children)
    return (f'<div class="{block_classes(props, "columns", f"columns--{count}")}" {interactive_attrs(props)}>\n'
            f'{cols}\n</div>')


def render_image_block(props: BlockRenderProps) -> str:
    # data : asset préchargé ({"url": ...}) ; sinon src direct dans les valeurs
    asset = props.data if isinstance(props.data, dict) else {}
    src = asset.get("url") or props.values.get("src") or ""
    alt = props.values.get("alt") or ""
    caption = props.values.get("caption")
    caption_html = f'\n  <figcaption class="image__caption">{_text(caption)}</figcaption>' if caption else ""
    return (f'<figure class="{block_classes(props, "image")}" {interactive_attrs(props)}>\n'
            f'  <img class="image__img" src="{_text(src)}" alt="{_text(alt)}" loading="lazy">{caption_html}\n'
            f'</figure>')


def default_html_renderers() -> BlockRendererRegistry:
    return (BlockRendererRegistry()
            .register("hero", render_hero_block)
            .register("text", render_text_block)
            .register("columns", render_columns_block)
            .register("image", render_image_block))


# ── Point d'entrée public ───────────────────────────────────────────────────

def render_content_html(content: Any, renderers: Optional[BlockRendererRegistry] = None, **options: Any) -> str:
    """HTML d'un contenu blocks (options : selected_block_id, on_block_click, is_preview)."""
    parts = render_block_tree(content, renderers or default_html_renderers(), **options)
    return "\n".join(str(p) for p in parts)
