"""
Arbre de blocs — recherche, parcours, index, règles d'enfants.

Les nœuds sont acceptés sous forme BlockNode ou dict JSON brut ({"id", "type", "children"}),
le wrapper travaillant directement sur le payload du formulaire.
"""
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .. import config
from ..core.schemas import TREE_KEY, VALUES_KEY, BlockContent, BlockDefinition
from ..errors import check_depth


# ── Accès aux nœuds ──────────────────────────────────────────────────────────

def node_id(node: Any) -> Optional[str]:
    if isinstance(node, Mapping):
        return node.get("id")
    return getattr(node, "id", None)


def node_type(node: Any) -> Optional[str]:
    if isinstance(node, Mapping):
        return node.get("type")
    return getattr(node, "type", None)


def node_children(node: Any) -> Sequence[Any]:
    if isinstance(node, Mapping):
        children = node.get("children")
    else:
        children = getattr(node, "children", None)
    return children if isinstance(children, (list, tuple)) else ()


def content_tree(content: Any) -> Sequence[Any]:
    """Forêt racine d'un BlockContent ou d'un dict {"_tree": [...]}."""
    if isinstance(content, BlockContent):
        return content.tree
    if isinstance(content, Mapping):
        tree = content.get(TREE_KEY)
        return tree if isinstance(tree, (list, tuple)) else ()
    return ()


def content_values(content: Any) -> Mapping[str, Any]:
    if isinstance(content, BlockContent):
        return content.values
    if isinstance(content, Mapping):
        values = content.get(VALUES_KEY)
        return values if isinstance(values, Mapping) else {}
    return {}


# ── Recherche / parcours ─────────────────────────────────────────────────────

def find_block(tree: Sequence[Any], block_id: str, _depth: int = 0) -> Optional[Any]:
    """Recherche en profondeur, premier trouvé (les ids sont uniques)."""
    check_depth(_depth, config.max_depth(), "arbre de blocs")
    for node in tree:
        if node_id(node) == block_id:
            return node
        children = node_children(node)
        if children:
            found = find_block(children, block_id, _depth + 1)
            if found is not None:
                return found
    return None


def iter_blocks(tree: Sequence[Any], _depth: int = 0, _parent: Any = None) -> Iterator[Tuple[Any, int, Any]]:
    """Parcours préfixe : (nœud, profondeur, parent)."""
    check_depth(_depth, config.max_depth(), "arbre de blocs")
    for node in tree:
        yield node, _depth, _parent
        yield from iter_blocks(node_children(node), _depth + 1, node)


def build_block_index(tree: Sequence[Any]) -> Dict[str, Any]:
    """Index id → nœud (la première occurrence gagne, comme find_block)."""
    index: Dict[str, Any] = {}
    for node, _, _ in iter_blocks(tree):
        bid = node_id(node)
        if bid is not None:
            index.setdefault(bid, node)
    return index


# ── Règles d'enfants ─────────────────────────────────────────────────────────

def check_block_tree(content: Any, blocks: Mapping[str, BlockDefinition]) -> List[str]:
    """
    Liste des anomalies d'un contenu (ne lève jamais sur les données) :
    ids dupliqués, types inconnus, enfants interdits / non autorisés / trop nombreux,
    entrée de valeurs absente.
    """
    issues: List[str] = []
    seen: set = set()
    values = content_values(content)

    for node, _, _ in iter_blocks(content_tree(content)):
        bid, btype = node_id(node), node_type(node)
        if bid in seen:
            issues.append(f"id dupliqué : {bid!r}")
        seen.add(bid)
        if bid not in values:
            issues.append(f"valeurs absentes pour le bloc {bid!r}")

        definition = blocks.get(btype) if btype is not None else None
        if definition is None:
            issues.append(f"type de bloc inconnu : {btype!r} ({bid!r})")
            continue

        children = node_children(node)
        if not children:
            continue
        if not definition.allow_children:
            issues.append(f"le bloc {btype!r} ({bid!r}) n'accepte pas d'enfants")
            continue
        if definition.max_children is not None and len(children) > definition.max_children:
            issues.append(f"le bloc {btype!r} ({bid!r}) accepte au plus {definition.max_children} enfants")
        if definition.allowed_children is not None:
            for child in children:
                if node_type(child) not in definition.allowed_children:
                    issues.append(f"enfant {node_type(child)!r} non autorisé dans {btype!r} ({bid!r})")

    return issues
