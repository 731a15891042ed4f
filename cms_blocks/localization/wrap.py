"""
Wrap des valeurs localisées imbriquées avec le marqueur $i18n.

Appliqué juste avant l'envoi au store. Ne traite que les champs imbriqués
(object, array d'objets, blocks) : les champs plats localisés d'une collection
sont découpés côté serveur d'après le schéma de la collection.

    >>> wrap_localized_nested_values(
    ...     {"author": {"name": "Ada", "bio": "Scientist"}},
    ...     fields={"author": r.create("object", fields={"name": r["text"](), "bio": r["text"](localized=True)})},
    ... )
    {'author': {'name': 'Ada', 'bio': {'$i18n': 'Scientist'}}}

Ne modifie jamais l'entrée : un sous-arbre sans champ localisé est renvoyé tel quel (même objet).
"""
import logging
from typing import Any, Dict, Mapping, Optional

from .. import config
from ..blocks.tree import content_tree, content_values, find_block, node_type
from ..core.i18n import is_i18n_wrapped, wrap_i18n
from ..core.schemas import VALUES_KEY, BlockContent, BlockDefinition, FieldDefinition
from ..errors import check_depth
from ..fields.resolve import (
    coerce_field_set,
    has_localized_fields,
    is_array_field,
    is_blocks_field,
    is_computed,
    is_localized,
    is_object_field,
    resolve_nested_fields,
)

log = logging.getLogger(__name__)

FieldMap = Mapping[str, FieldDefinition]
BlockMap = Mapping[str, BlockDefinition]


def block_fields(definition: Any) -> Optional[FieldMap]:
    """Champs d'une définition de bloc (BlockDefinition ou dict {"fields": ...})."""
    if definition is None:
        return None
    if isinstance(definition, Mapping):
        return coerce_field_set(definition.get("fields"))
    return coerce_field_set(getattr(definition, "fields", None))


def replace_block_values(content: Any, values: Dict[str, Any]) -> Any:
    """Copie du contenu blocks avec une nouvelle table de valeurs (tree et data partagés)."""
    if isinstance(content, BlockContent):
        return content.model_copy(update={"values": values})
    out = dict(content)
    out[VALUES_KEY] = values
    return out


# ── Niveaux imbriqués ────────────────────────────────────────────────────────

def _wrap_nested(value: Any, field_def: Optional[FieldDefinition], blocks: Optional[BlockMap],
                 registry: Optional[Mapping], depth: int) -> Any:
    """object / array / blocks ; tout autre champ passe inchangé."""
    if is_object_field(field_def):
        nested = resolve_nested_fields(field_def, registry)
        if isinstance(value, Mapping) and has_localized_fields(nested, registry):
            return _wrap_object(value, nested, blocks, registry, depth + 1)
        return value

    if is_array_field(field_def):
        item_fields = resolve_nested_fields(field_def, registry)
        if isinstance(value, list) and has_localized_fields(item_fields, registry):
            return [
                _wrap_object(item, item_fields, blocks, registry, depth + 1)
                if isinstance(item, Mapping) else item
                for item in value
            ]
        return value

    if is_blocks_field(field_def) and blocks:
        return _wrap_blocks(value, blocks, registry, depth + 1)

    return value


def _wrap_object(value: Mapping[str, Any], nested: FieldMap, blocks: Optional[BlockMap],
                 registry: Optional[Mapping], depth: int) -> Dict[str, Any]:
    check_depth(depth, config.max_depth(), "wrap $i18n")
    result: Dict[str, Any] = {}
    for key, field_value in value.items():
        field_def = nested.get(key)
        if is_computed(field_def):
            continue
        if field_value is None or is_i18n_wrapped(field_value):
            result[key] = field_value
            continue
        if is_localized(field_def):
            result[key] = wrap_i18n(field_value)
            continue
        result[key] = _wrap_nested(field_value, field_def, blocks, registry, depth)
    return result


def _wrap_blocks(content: Any, blocks: BlockMap, registry: Optional[Mapping], depth: int) -> Any:
    values = content_values(content)
    if not values:
        return content
    check_depth(depth, config.max_depth(), "wrap $i18n")

    tree = content_tree(content)
    processed: Dict[str, Any] = {}
    changed = False

    for block_id, block_values in values.items():
        node = find_block(tree, block_id)
        if node is None:
            log.debug("valeurs orphelines conservées : bloc %r absent de l'arbre", block_id)
            processed[block_id] = block_values
            continue

        fields = block_fields(blocks.get(node_type(node)))
        if not fields or not isinstance(block_values, Mapping) or not has_localized_fields(fields, registry):
            processed[block_id] = block_values
            continue

        processed[block_id] = _wrap_object(block_values, fields, blocks, registry, depth + 1)
        changed = True

    if not changed:
        return content
    return replace_block_values(content, processed)


# ── Point d'entrée public ────────────────────────────────────────────────────

def wrap_localized_nested_values(data: Mapping[str, Any], fields: FieldMap,
                                 blocks: Optional[BlockMap] = None,
                                 registry: Optional[Mapping] = None) -> Dict[str, Any]:
    """
    Marque les valeurs localisées des champs imbriqués avant soumission.

    Args:
        data: Valeurs du formulaire (nom de champ → valeur)
        fields: Définitions de champs de la collection
        blocks: Registre des blocs (requis pour les champs blocks)
        registry: Registre des types de champs (requis pour les callbacks fields/item)

    Returns:
        Nouveau dict : champs calculés retirés, valeurs imbriquées localisées wrappées
    """
    result: Dict[str, Any] = {}
    for name, value in data.items():
        field_def = fields.get(name)
        if is_computed(field_def):
            continue
        if value is None or is_i18n_wrapped(value):
            result[name] = value
            continue
        result[name] = _wrap_nested(value, field_def, blocks, registry, 0)
    return result
