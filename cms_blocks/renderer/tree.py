"""
Rendu d'un arbre de blocs — parcours en profondeur, enfants rendus avant leur parent.

Type sans renderer → rien (diagnostic hors production), jamais d'exception.
on_block_click fourni → chaque nœud devient activable (props.interactive + props.on_click).
"""
import functools
import logging
from collections.abc import Hashable
from typing import Any, Callable, List, Mapping, Optional

from .. import config
from ..blocks.tree import content_tree, content_values, node_children, node_id, node_type
from ..core.i18n import strip_i18n_wrappers
from ..core.schemas import DATA_KEY, BlockContent
from ..errors import check_depth
from .base import BlockRendererRegistry, BlockRenderProps

log = logging.getLogger(__name__)


def _content_data(content: Any) -> Mapping[str, Any]:
    if isinstance(content, BlockContent):
        return content.data or {}
    if isinstance(content, Mapping):
        data = content.get(DATA_KEY)
        return data if isinstance(data, Mapping) else {}
    return {}


def _lookup(table: Mapping[str, Any], block_id: Any, key: str) -> Any:
    """Entrée d'un bloc, id tel quel puis sous forme de chaîne (clés JSON)."""
    if isinstance(block_id, Hashable) and block_id in table:
        return table[block_id]
    return table.get(key)


def render_block_tree(content: Any, renderers: BlockRendererRegistry, *,
                      selected_block_id: Optional[str] = None,
                      on_block_click: Optional[Callable[[str], Any]] = None,
                      is_preview: bool = False,
                      resolve_values: Callable[[Any], Any] = strip_i18n_wrappers) -> List[Any]:
    """
    Rend la forêt racine d'un contenu blocks.

    Args:
        content: BlockContent ou dict {"_tree", "_values", "_data"}
        renderers: Registre des renderers par type de bloc
        selected_block_id: Bloc sélectionné dans l'éditeur
        on_block_click: Callback(id), rend les blocs interactifs
        is_preview: Rendu en mode preview
        resolve_values: Résolution des valeurs d'un nœud (par défaut : retrait des wrappers $i18n)

    Returns:
        Rendus des racines, types inconnus omis
    """
    values = content_values(content)
    data = _content_data(content)
    max_depth = config.max_depth()

    def render_node(node: Any, depth: int) -> Any:
        check_depth(depth, max_depth, "rendu de l'arbre")
        block_type, block_id = node_type(node), node_id(node)
        renderer = renderers.get_renderer(block_type) if isinstance(block_type, str) else None
        if renderer is None:
            if not config.is_production():
                log.warning("Aucun renderer pour le type de bloc %r (bloc %r), ignoré", block_type, block_id)
            return None
        if block_id is None:
            if not config.is_production():
                log.warning("Bloc %r sans id, ignoré", block_type)
            return None
        key = str(block_id)

        children = [r for r in (render_node(c, depth + 1) for c in node_children(node)) if r is not None]

        own_values = _lookup(values, block_id, key)
        own_values = resolve_values(own_values) if isinstance(own_values, Mapping) else {}

        props = BlockRenderProps(
            id=key,
            type=block_type,
            values=dict(own_values),
            data=_lookup(data, block_id, key),
            children=children,
            is_selected=selected_block_id is not None and key == str(selected_block_id),
            is_preview=is_preview,
            interactive=on_block_click is not None,
            on_click=functools.partial(on_block_click, block_id) if on_block_click else None,
        )
        return renderer(props)

    rendered = (render_node(node, 0) for node in content_tree(content))
    return [r for r in rendered if r is not None]
