"""
CMS Blocks v0.3 — moteur de contenu structuré par blocs, localisé par champ.

Usage (wrap avant soumission):
    >>> from cms_blocks import default_field_registry, wrap_localized_nested_values
    >>> r = default_field_registry()
    >>> fields = {"author": r.create("object", fields={"name": r["text"](), "bio": r["text"](localized=True)})}
    >>> wrap_localized_nested_values({"author": {"name": "Ada", "bio": "Scientist"}}, fields)
    {'author': {'name': 'Ada', 'bio': {'$i18n': 'Scientist'}}}

Usage (plan d'expansion d'une vue liste):
    >>> from cms_blocks import plan_expansion, ListViewConfig
    >>> plan_expansion(fields, ListViewConfig(columns=["title", "author"]), known_relation_names=["author"])

Usage (rendu HTML d'un contenu blocks):
    >>> from cms_blocks import render_content_html
    >>> html = render_content_html({"_tree": [...], "_values": {...}}, selected_block_id="h1")
"""

# ── Config / erreurs ────────────────────────────────────────────────────────
from .errors import BlockEngineError, MaxDepthExceeded

# ── Schémas ─────────────────────────────────────────────────────────────────
from .core.schemas import (
    FieldOptions,
    FieldDefinition,
    ListCellConfig,
    BlockNode,
    BlockContent,
    BlockDefinition,
    ColumnConfig,
    ListViewConfig,
)
from .core.i18n import is_i18n_wrapped, wrap_i18n, unwrap_i18n, strip_i18n_wrappers

# ── Champs ──────────────────────────────────────────────────────────────────
from .fields import FieldTypeRegistry, default_field_registry, resolve_nested_fields, has_localized_fields

# ── Arbre de blocs ──────────────────────────────────────────────────────────
from .blocks import find_block, iter_blocks, build_block_index, check_block_tree

# ── Localisation ────────────────────────────────────────────────────────────
from .localization import (
    wrap_localized_nested_values,
    unwrap_localized_nested_values,
    split_localized_fields,
    deep_merge_i18n,
    merge_nested_localized,
)

# ── Expansion ───────────────────────────────────────────────────────────────
from .expansion import (
    plan_expansion,
    plan_collection_expansion,
    has_fields_to_expand,
    detect_many_to_many_relations,
    has_many_to_many_relations,
    relation_objects_to_ids,
)

# ── Rendu ───────────────────────────────────────────────────────────────────
from .renderer import BlockRenderProps, BlockRendererRegistry, render_block_tree, render_content_html

# ── Admin ───────────────────────────────────────────────────────────────────
from .admin import AdminConfig, CollectionConfig

__version__ = "0.3.0"

__all__ = [
    # erreurs
    "BlockEngineError", "MaxDepthExceeded",
    # schémas
    "FieldOptions", "FieldDefinition", "ListCellConfig",
    "BlockNode", "BlockContent", "BlockDefinition", "ColumnConfig", "ListViewConfig",
    "is_i18n_wrapped", "wrap_i18n", "unwrap_i18n", "strip_i18n_wrappers",
    # champs
    "FieldTypeRegistry", "default_field_registry", "resolve_nested_fields", "has_localized_fields",
    # arbre
    "find_block", "iter_blocks", "build_block_index", "check_block_tree",
    # localisation
    "wrap_localized_nested_values", "unwrap_localized_nested_values",
    "split_localized_fields", "deep_merge_i18n", "merge_nested_localized",
    # expansion
    "plan_expansion", "plan_collection_expansion", "has_fields_to_expand",
    "detect_many_to_many_relations", "has_many_to_many_relations", "relation_objects_to_ids",
    # rendu
    "BlockRenderProps", "BlockRendererRegistry", "render_block_tree", "render_content_html",
    # admin
    "AdminConfig", "CollectionConfig",
]
