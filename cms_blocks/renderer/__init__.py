"""Contrat de rendu de l'arbre de blocs + renderers HTML de référence."""
from .base import BlockRenderer, BlockRenderProps, BlockRendererRegistry
from .tree import render_block_tree
from .html import default_html_renderers, render_content_html

__all__ = [
    "BlockRenderer", "BlockRenderProps", "BlockRendererRegistry",
    "render_block_tree", "default_html_renderers", "render_content_html",
]
