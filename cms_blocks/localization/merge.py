"""
Découpage / fusion des valeurs localisées côté store.

Écriture :  {"hero": {"title": {"$i18n": "Bonjour"}, "align": "center"}}
  structure → {"hero": {"title": {"$i18n": True}, "align": "center"}}   (ligne principale)
  valeurs   → {"hero": {"title": "Bonjour"}}                            (ligne de la locale)

Lecture : chaque marqueur prend la première valeur non nulle de la chaîne
de locales (locale demandée, puis fallback).
"""
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ..core.i18n import I18N_KEY, I18N_MARKER, is_i18n_marker
from ..core.schemas import TREE_KEY, VALUES_KEY

ORDER_KEY = "_order"


class LocalizedSplit(NamedTuple):
    localized: Dict[str, Any]
    non_localized: Dict[str, Any]
    nested_localized: Optional[Dict[str, Any]]


# ── Découpage ────────────────────────────────────────────────────────────────

def split_i18n_wrappers(value: Any) -> Tuple[Any, Any]:
    """(structure avec marqueurs, valeurs localisées ou None)."""
    if value is None:
        return value, None

    if isinstance(value, dict):
        if len(value) == 1 and I18N_KEY in value:
            return dict(I18N_MARKER), value[I18N_KEY]
        structure: Dict[str, Any] = {}
        i18n_values: Dict[str, Any] = {}
        for key, child in value.items():
            child_structure, child_i18n = split_i18n_wrappers(child)
            structure[key] = child_structure
            if child_i18n is not None:
                i18n_values[key] = child_i18n
        return structure, (i18n_values or None)

    if isinstance(value, list):
        structure_list: List[Any] = []
        i18n_list: List[Any] = []
        for item in value:
            item_structure, item_i18n = split_i18n_wrappers(item)
            structure_list.append(item_structure)
            i18n_list.append(item_i18n)
        has_i18n = any(v is not None for v in i18n_list)
        return structure_list, (i18n_list if has_i18n else None)

    return value, None


def split_localized_fields(data: Dict[str, Any], localized_fields: Iterable[str]) -> LocalizedSplit:
    """
    Champs localisés de premier niveau → ligne de la locale ;
    autres champs → structure (wrappers imbriqués remplacés par des marqueurs).
    """
    localized_set = set(localized_fields)
    localized: Dict[str, Any] = {}
    non_localized: Dict[str, Any] = {}
    nested: Dict[str, Any] = {}

    for key, value in data.items():
        if key in localized_set:
            localized[key] = value
            continue
        structure, i18n_values = split_i18n_wrappers(value)
        non_localized[key] = structure
        if i18n_values is not None:
            nested[key] = i18n_values

    return LocalizedSplit(localized, non_localized, nested or None)


# ── Fusion ───────────────────────────────────────────────────────────────────

def has_i18n_markers(value: Any) -> bool:
    if is_i18n_marker(value):
        return True
    if isinstance(value, list):
        return any(has_i18n_markers(v) for v in value)
    if isinstance(value, dict):
        return any(has_i18n_markers(v) for v in value.values())
    return False


def _is_blocks_structure(value: Any) -> bool:
    return (isinstance(value, dict)
            and isinstance(value.get(TREE_KEY), list)
            and isinstance(value.get(VALUES_KEY), dict))


def _is_id_based_map(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get(ORDER_KEY), list)


def _layer_get(layer: Any, key: Any) -> Any:
    if isinstance(layer, dict):
        return layer.get(key)
    if isinstance(layer, list) and isinstance(key, int) and 0 <= key < len(layer):
        return layer[key]
    return None


def deep_merge_i18n(structure: Any, chain: Sequence[Any]) -> Any:
    """Remplace chaque marqueur par la première valeur non nulle de la chaîne (sinon None)."""
    if is_i18n_marker(structure):
        for layer in chain:
            if layer is not None:
                return layer
        return None

    if _is_blocks_structure(structure):
        result = dict(structure)
        layers = [_layer_get(layer, VALUES_KEY) for layer in chain]
        result[VALUES_KEY] = {
            block_id: deep_merge_i18n(block_values, [_layer_get(l, block_id) for l in layers])
            for block_id, block_values in structure[VALUES_KEY].items()
        }
        return result

    if _is_id_based_map(structure):
        result = {ORDER_KEY: structure[ORDER_KEY]}
        for key, child in structure.items():
            if key == ORDER_KEY:
                continue
            result[key] = deep_merge_i18n(child, [_layer_get(l, key) for l in chain])
        return result

    if isinstance(structure, list):
        return [
            deep_merge_i18n(item, [_layer_get(l, index) for l in chain])
            for index, item in enumerate(structure)
        ]

    if isinstance(structure, dict):
        return {
            key: deep_merge_i18n(child, [_layer_get(l, key) for l in chain])
            for key, child in structure.items()
        }

    return structure


def merge_nested_localized(row: Dict[str, Any], current: Optional[Dict[str, Any]],
                           fallback: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Fusionne les valeurs imbriquées (locale courante puis fallback) dans une ligne."""
    result = dict(row)
    for name, value in row.items():
        if not has_i18n_markers(value):
            continue
        result[name] = deep_merge_i18n(value, [_layer_get(current, name), _layer_get(fallback, name)])
    return result
