"""
Protocol BlockRenderer — interface pluggable pour les renderers de blocs (HTML, JSON…),
et registre nom de bloc → renderer.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from .. import config

log = logging.getLogger(__name__)


class BlockRenderProps(BaseModel):
    """Ce que reçoit un renderer pour un nœud résolu."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    type: str
    values: Dict[str, Any] = Field(default_factory=dict)
    data: Any = None
    children: List[Any] = Field(default_factory=list)
    is_selected: bool = False
    is_preview: bool = False
    interactive: bool = False
    on_click: Optional[Callable[[], Any]] = None


@runtime_checkable
class BlockRenderer(Protocol):
    def __call__(self, props: BlockRenderProps) -> Any: ...


class BlockRendererRegistry:
    """
    Registre immuable des renderers.

    Usage:
        >>> renderers = BlockRendererRegistry().register("hero", render_hero)
        >>> renderers.has_renderer("hero")
        True
    """

    def __init__(self, renderers: Optional[Dict[str, BlockRenderer]] = None):
        self._renderers: Dict[str, BlockRenderer] = dict(renderers or {})

    def register(self, block_name: str, renderer: Callable[[BlockRenderProps], Any]) -> "BlockRendererRegistry":
        updated = dict(self._renderers)
        updated[block_name] = renderer
        return BlockRendererRegistry(updated)

    def get_renderer(self, block_name: str) -> Optional[BlockRenderer]:
        return self._renderers.get(block_name)

    def has_renderer(self, block_name: str) -> bool:
        return block_name in self._renderers

    def block_names(self) -> List[str]:
        return list(self._renderers)

    def render_block(self, block_name: str, props: BlockRenderProps) -> Any:
        """Rend un bloc, None (avertissement hors production) si aucun renderer n'est enregistré."""
        renderer = self.get_renderer(block_name)
        if renderer is None:
            if not config.is_production():
                log.warning("Aucun renderer pour le type de bloc : %s", block_name)
            return None
        return renderer(props)
