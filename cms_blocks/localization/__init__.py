"""Localisation — wrap/unwrap $i18n + découpage/fusion par locale."""
from .wrap import wrap_localized_nested_values
from .unwrap import unwrap_localized_nested_values
from .merge import (
    LocalizedSplit,
    split_i18n_wrappers,
    split_localized_fields,
    has_i18n_markers,
    deep_merge_i18n,
    merge_nested_localized,
)

__all__ = [
    "wrap_localized_nested_values",
    "unwrap_localized_nested_values",
    "LocalizedSplit",
    "split_i18n_wrappers",
    "split_localized_fields",
    "has_i18n_markers",
    "deep_merge_i18n",
    "merge_nested_localized",
]
