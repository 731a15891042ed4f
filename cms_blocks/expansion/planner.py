"""
Plan d'expansion ("with") — relations / uploads à résoudre au fetch.

Règles :
  upload / uploadMany            → toujours True (l'asset est inutile sans son enregistrement)
  relation                       → True si le nom de relation est connu du backend
  listCell.avatarField "a.b"     → {"with": {"a": True}} sous la relation (fusion, jamais écrasement)
  list.relations                 → toujours inclus
Champs examinés : colonnes explicites de la vue liste, sinon toutes les clés de fields.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..core.schemas import FieldDefinition, ListViewConfig
from ..fields.resolve import is_relation_field, is_upload_field

log = logging.getLogger(__name__)

ExpansionPlan = Dict[str, Union[bool, Dict[str, Dict[str, bool]]]]


def relation_name_of(field_name: str, field_def: FieldDefinition) -> str:
    """Nom de relation explicite, sinon le nom du champ."""
    return field_def.options.relation_name or field_name


def avatar_relation(field_def: FieldDefinition) -> Optional[str]:
    """Premier segment de listCell.avatarField quand il a la forme "relation.chemin"."""
    cell = field_def.options.list_cell
    path = cell.avatar_field if cell else None
    if not path or "." not in path:
        return None
    head = path.split(".", 1)[0]
    return head or None


def _request(plan: ExpansionPlan, name: str) -> None:
    plan.setdefault(name, True)


def _request_nested(plan: ExpansionPlan, name: str, nested: str) -> None:
    current = plan.get(name)
    if isinstance(current, dict):
        current.setdefault("with", {})[nested] = True
    else:
        plan[name] = {"with": {nested: True}}


def fields_to_check(fields: Mapping[str, FieldDefinition], list_config: Optional[ListViewConfig]) -> List[str]:
    """Colonnes explicites > clés de fields."""
    columns = list_config.column_names() if list_config else []
    return columns if columns else list(fields)


def plan_expansion(fields: Mapping[str, FieldDefinition],
                   list_config: Optional[ListViewConfig] = None,
                   known_relation_names: Optional[Iterable[str]] = None) -> ExpansionPlan:
    """
    Construit le plan "with" d'un fetch.

    Args:
        fields: Définitions de champs (collection ou set imbriqué)
        list_config: Vue liste (colonnes + relations explicites)
        known_relation_names: Relations définies côté backend (None = pas de contrainte)

    Returns:
        nom de relation → True | {"with": {relation imbriquée: True}}
    """
    known = set(known_relation_names) if known_relation_names is not None else None
    plan: ExpansionPlan = {}

    for name in fields_to_check(fields, list_config):
        field_def = fields.get(name)
        if field_def is None:
            continue

        if is_upload_field(field_def):
            _request(plan, relation_name_of(name, field_def))
            continue

        if not is_relation_field(field_def):
            continue

        relation = relation_name_of(name, field_def)
        if known is not None and relation not in known:
            log.debug("relation %r ignorée : inconnue du schéma backend", relation)
            continue

        nested = avatar_relation(field_def)
        if nested:
            _request_nested(plan, relation, nested)
        else:
            _request(plan, relation)

    if list_config:
        for relation in list_config.relations:
            _request(plan, relation)

    return plan


def has_fields_to_expand(plan: Optional[Mapping[str, Any]]) -> bool:
    return bool(plan)


def plan_collection_expansion(collection: Any) -> ExpansionPlan:
    """Raccourci sur une CollectionConfig (fields + list + relations connues)."""
    return plan_expansion(collection.fields, collection.list_view, collection.relations)
