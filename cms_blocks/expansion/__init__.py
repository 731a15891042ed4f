"""Plan d'expansion des relations / uploads + détection M:N."""
from .planner import (
    ExpansionPlan,
    relation_name_of,
    avatar_relation,
    fields_to_check,
    plan_expansion,
    has_fields_to_expand,
    plan_collection_expansion,
)
from .many_to_many import (
    MULTI_VALUED_RELATION_TYPES,
    normalize_relation_type,
    is_multi_valued,
    detect_many_to_many_relations,
    has_many_to_many_relations,
    relation_objects_to_ids,
)

__all__ = [
    "ExpansionPlan", "relation_name_of", "avatar_relation", "fields_to_check",
    "plan_expansion", "has_fields_to_expand", "plan_collection_expansion",
    "MULTI_VALUED_RELATION_TYPES", "normalize_relation_type", "is_multi_valued",
    "detect_many_to_many_relations", "has_many_to_many_relations", "relation_objects_to_ids",
]
