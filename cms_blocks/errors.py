"""Erreurs du moteur de blocs."""


class BlockEngineError(Exception):
    """Erreur de base du moteur."""


class MaxDepthExceeded(BlockEngineError, ValueError):
    """Parcours plus profond que CMS_MAX_DEPTH (arbre ou champs imbriqués)."""

    def __init__(self, limit: int, where: str = ""):
        self.limit = limit
        self.where = where
        msg = f"Profondeur maximale dépassée ({limit})"
        if where:
            msg += f" : {where}"
        super().__init__(msg)


def check_depth(depth: int, limit: int, where: str = "") -> None:
    if depth > limit:
        raise MaxDepthExceeded(limit, where)
