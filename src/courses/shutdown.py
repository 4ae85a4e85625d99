"""Process-level shutdown on fatal errors.

Library code raises; the entry point owns termination. The CLI attaches the
running uvicorn server here and exits with ``exit_code`` once it stops.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

from .logging import get_logger

logger = get_logger(__name__)


class ShutdownCoordinator:
    """Turns fatal errors into process termination with a non-zero status."""

    def __init__(self, terminate: Callable[[int], Any] = os._exit):
        self._terminate = terminate
        self._server: Any = None
        self.exit_code = 0

    def attach(self, server: Any) -> None:
        """Register the running server (anything with a ``should_exit`` flag)."""
        self._server = server

    def detach(self) -> None:
        self._server = None

    @property
    def exit_requested(self) -> bool:
        return self.exit_code != 0

    def request_exit(self, exit_code: int = 1, reason: str | None = None) -> None:
        """Stop the process with ``exit_code``.

        The first non-zero code wins. Without an attached server the process is
        terminated immediately.
        """
        if not self.exit_code:
            self.exit_code = exit_code

        logger.critical("Fatal error, shutting down", exit_code=self.exit_code, reason=reason)

        if self._server is not None:
            self._server.should_exit = True
        else:
            self._terminate(self.exit_code)


# Global instance
_coordinator = ShutdownCoordinator()


def get_shutdown_coordinator() -> ShutdownCoordinator:
    return _coordinator


def request_exit(exit_code: int = 1, reason: str | None = None) -> None:
    _coordinator.request_exit(exit_code=exit_code, reason=reason)
