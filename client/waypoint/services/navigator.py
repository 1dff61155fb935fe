"""Navigator: hands route changes to the host application."""

import logging

logger = logging.getLogger(__name__)


class Navigator:
    """Records the current route. The host app supplies ``on_navigate`` to actually switch pages."""

    def __init__(self, initial: str = "/", on_navigate=None):
        self.current = initial
        self.history: list[str] = [initial]
        self._on_navigate = on_navigate

    def navigate(self, path: str) -> None:
        logger.info(f"Navigate {self.current} -> {path}")
        self.current = path
        self.history.append(path)
        if self._on_navigate is not None:
            self._on_navigate(path)
