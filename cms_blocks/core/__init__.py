"""Core module pour cms_blocks."""
from .schemas import (
    TREE_KEY,
    VALUES_KEY,
    DATA_KEY,
    ListCellConfig,
    FieldOptions,
    FieldDefinition,
    FieldSet,
    BlockNode,
    BlockContent,
    BlockDefinition,
    ColumnConfig,
    ListViewConfig,
)
from .i18n import (
    I18N_KEY,
    I18N_MARKER,
    is_i18n_wrapped,
    wrap_i18n,
    unwrap_i18n,
    is_i18n_marker,
    strip_i18n_wrappers,
)

__all__ = [
    "TREE_KEY",
    "VALUES_KEY",
    "DATA_KEY",
    "ListCellConfig",
    "FieldOptions",
    "FieldDefinition",
    "FieldSet",
    "BlockNode",
    "BlockContent",
    "BlockDefinition",
    "ColumnConfig",
    "ListViewConfig",
    "I18N_KEY",
    "I18N_MARKER",
    "is_i18n_wrapped",
    "wrap_i18n",
    "unwrap_i18n",
    "is_i18n_marker",
    "strip_i18n_wrappers",
]
