"""
Unwrap — inverse du wrap : même parcours du registre, retire une couche $i18n
partout où un wrapper est trouvé. Aucun champ n'est supprimé.
"""
from typing import Any, Dict, Mapping, Optional

from .. import config
from ..blocks.tree import content_tree, content_values, find_block, node_type
from ..core.i18n import is_i18n_wrapped, unwrap_i18n
from ..core.schemas import FieldDefinition
from ..errors import check_depth
from ..fields.resolve import (
    has_localized_fields,
    is_array_field,
    is_blocks_field,
    is_object_field,
    resolve_nested_fields,
)
from .wrap import BlockMap, FieldMap, block_fields, replace_block_values


def _unwrap_value(value: Any, field_def: Optional[FieldDefinition], blocks: Optional[BlockMap],
                  registry: Optional[Mapping], depth: int) -> Any:
    if value is None:
        return value
    if is_i18n_wrapped(value):
        return unwrap_i18n(value)

    if is_object_field(field_def):
        nested = resolve_nested_fields(field_def, registry)
        if isinstance(value, Mapping) and has_localized_fields(nested, registry):
            return _unwrap_object(value, nested, blocks, registry, depth + 1)
        return value

    if is_array_field(field_def):
        item_fields = resolve_nested_fields(field_def, registry)
        if isinstance(value, list) and has_localized_fields(item_fields, registry):
            return [
                _unwrap_object(item, item_fields, blocks, registry, depth + 1)
                if isinstance(item, Mapping) else item
                for item in value
            ]
        return value

    if is_blocks_field(field_def) and blocks:
        return _unwrap_blocks(value, blocks, registry, depth + 1)

    return value


def _unwrap_object(value: Mapping[str, Any], nested: FieldMap, blocks: Optional[BlockMap],
                   registry: Optional[Mapping], depth: int) -> Dict[str, Any]:
    check_depth(depth, config.max_depth(), "unwrap $i18n")
    return {
        key: _unwrap_value(v, nested.get(key), blocks, registry, depth)
        for key, v in value.items()
    }


def _unwrap_blocks(content: Any, blocks: BlockMap, registry: Optional[Mapping], depth: int) -> Any:
    values = content_values(content)
    if not values:
        return content
    check_depth(depth, config.max_depth(), "unwrap $i18n")

    tree = content_tree(content)
    processed: Dict[str, Any] = {}
    changed = False
    for block_id, block_values in values.items():
        node = find_block(tree, block_id)
        fields = block_fields(blocks.get(node_type(node))) if node is not None else None
        if not fields or not isinstance(block_values, Mapping) or not has_localized_fields(fields, registry):
            processed[block_id] = block_values
            continue
        processed[block_id] = _unwrap_object(block_values, fields, blocks, registry, depth + 1)
        changed = True

    if not changed:
        return content
    return replace_block_values(content, processed)


def unwrap_localized_nested_values(data: Mapping[str, Any], fields: FieldMap,
                                   blocks: Optional[BlockMap] = None,
                                   registry: Optional[Mapping] = None) -> Dict[str, Any]:
    """Retire les marqueurs $i18n posés par wrap_localized_nested_values (une couche)."""
    return {
        name: _unwrap_value(value, fields.get(name), blocks, registry, 0)
        for name, value in data.items()
    }
