"""Arbre de blocs — recherche, parcours, règles d'enfants."""
from .tree import (
    node_id,
    node_type,
    node_children,
    content_tree,
    content_values,
    find_block,
    iter_blocks,
    build_block_index,
    check_block_tree,
)

__all__ = [
    "node_id", "node_type", "node_children", "content_tree", "content_values",
    "find_block", "iter_blocks", "build_block_index", "check_block_tree",
]
