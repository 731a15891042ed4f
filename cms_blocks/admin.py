"""
Configuration admin assemblée — collections, blocs, registre des types de champs.
Les builders produisent ces objets ; le moteur ne fait que les lire.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core.schemas import BlockDefinition, FieldDefinition, ListViewConfig
from .fields.registry import FieldTypeRegistry, default_field_registry
from .fields.resolve import is_localized


class CollectionConfig(BaseModel):
    """Collection : champs, vue liste, relations connues du backend (None = pas de contrainte)."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    fields: Dict[str, FieldDefinition] = Field(default_factory=dict)
    list_view: ListViewConfig = Field(default_factory=ListViewConfig, alias="list")
    relations: Optional[List[str]] = None

    def localized_field_names(self) -> List[str]:
        """Champs localisés de premier niveau (découpés par le store)."""
        return [name for name, fd in self.fields.items() if is_localized(fd)]


class AdminConfig:
    """
    Registres assemblés.

    Usage:
        >>> admin = AdminConfig()
        >>> admin.add_block(BlockDefinition(name="hero", fields={...}))
        >>> admin.add_collection(CollectionConfig(name="pages", fields={...}))
    """

    def __init__(self, field_types: Optional[FieldTypeRegistry] = None,
                 blocks: Optional[Dict[str, BlockDefinition]] = None,
                 collections: Optional[Dict[str, CollectionConfig]] = None):
        self.field_types = field_types if field_types is not None else default_field_registry()
        self.blocks: Dict[str, BlockDefinition] = dict(blocks or {})
        self.collections: Dict[str, CollectionConfig] = dict(collections or {})

    def get_collection(self, name: str) -> Optional[CollectionConfig]:
        return self.collections.get(name)

    def add_collection(self, collection: CollectionConfig) -> "AdminConfig":
        self.collections[collection.name] = collection
        return self

    def add_block(self, block: BlockDefinition) -> "AdminConfig":
        self.blocks[block.name] = block
        return self
