"""
Schémas Pydantic du moteur de blocs.
Structure récursive : BlockContent → BlockNode → BlockNode…  (+ table de valeurs par id)

Registres externes (lecture seule pour le moteur) :
  FieldDefinition  — typeName + options (localized, compute, fields, item, relationName…)
  BlockDefinition  — champs d'un type de bloc + règles d'enfants
  ListViewConfig   — colonnes affichées + relations toujours chargées
"""
from typing import Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Clés du format JSON d'un champ blocks
TREE_KEY = "_tree"
VALUES_KEY = "_values"
DATA_KEY = "_data"


# ── Définitions de champs ───────────────────────────────────────────────────

class ListCellConfig(BaseModel):
    """Affichage d'une relation dans une cellule de liste."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    display: Optional[Literal["chip", "avatarChip"]] = None
    avatar_field: Optional[str] = Field(default=None, alias="avatarField")
    label_field: Optional[str] = Field(default=None, alias="labelField")


class FieldOptions(BaseModel):
    """
    Options d'un champ. Seules les clés ci-dessous sont lues par le moteur,
    les autres sont conservées telles quelles (extra="allow").

    fields / item : mapping de FieldDefinition OU callback(registry) → mapping
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow", arbitrary_types_allowed=True)

    localized: bool = False
    compute: Optional[Callable[..., Any]] = None
    fields: Optional[Union[Dict[str, "FieldDefinition"], Callable[..., Any]]] = None
    item: Optional[Union[Dict[str, "FieldDefinition"], Callable[..., Any]]] = None
    item_type: Optional[str] = Field(default=None, alias="itemType")
    relation_name: Optional[str] = Field(default=None, alias="relationName")
    type: Optional[Literal["single", "multiple"]] = None
    multiple: bool = False
    list_cell: Optional[ListCellConfig] = Field(default=None, alias="listCell")


class FieldDefinition(BaseModel):
    """Définition d'un champ : nom du type (comportement) + options."""
    model_config = ConfigDict(populate_by_name=True)

    type_name: str = Field(..., alias="typeName")
    options: FieldOptions = Field(default_factory=FieldOptions)


FieldOptions.model_rebuild()

FieldSet = Dict[str, FieldDefinition]


# ── Arbre de blocs ──────────────────────────────────────────────────────────

class BlockNode(BaseModel):
    """Nœud de l'arbre : id stable, type (clé du registre de blocs), enfants ordonnés."""
    id: str
    type: str
    children: List["BlockNode"] = Field(default_factory=list)


class BlockContent(BaseModel):
    """
    Contenu d'un champ blocks.
    tree   : forêt ordonnée de BlockNode
    values : id de bloc → valeurs propres du bloc (pas celles des descendants)
    data   : id de bloc → données préchargées (rempli à l'extérieur)
    """
    model_config = ConfigDict(populate_by_name=True)

    tree: List[BlockNode] = Field(default_factory=list, alias=TREE_KEY)
    values: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias=VALUES_KEY)
    data: Optional[Dict[str, Any]] = Field(default=None, alias=DATA_KEY)

    def values_for(self, block_id: str) -> Dict[str, Any]:
        """Valeurs d'un bloc, entrée absente = tous les champs vides."""
        return self.values.get(block_id) or {}

    def data_for(self, block_id: str) -> Any:
        if not self.data:
            return None
        return self.data.get(block_id)


class BlockDefinition(BaseModel):
    """Type de bloc : ses champs + règles d'enfants optionnelles."""
    name: str
    label: Optional[str] = None
    fields: Dict[str, FieldDefinition] = Field(default_factory=dict)
    allow_children: bool = False
    allowed_children: Optional[List[str]] = None
    max_children: Optional[int] = Field(default=None, ge=0)


# ── Vue liste ───────────────────────────────────────────────────────────────

class ColumnConfig(BaseModel):
    field: str
    label: Optional[str] = None


class ListViewConfig(BaseModel):
    """Configuration de la vue liste d'une collection."""
    columns: Optional[List[Union[str, ColumnConfig]]] = None
    relations: List[str] = Field(default_factory=list)

    def column_names(self) -> List[str]:
        names = []
        for col in self.columns or []:
            names.append(col if isinstance(col, str) else col.field)
        return names


BlockNode.model_rebuild()
