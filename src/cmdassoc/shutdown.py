"""Saves modified registries when the process exits."""
from __future__ import annotations

import atexit
import logging

from cmdassoc.persistence.engine import PersistenceEngine

logger = logging.getLogger(__name__)


class ShutdownHook:
    """Runs the shutdown tasks of one persistence engine, at most once.

    ``perform`` can be called explicitly (for example from a "quit" action);
    ``install`` additionally registers it to run at interpreter exit, which
    becomes a no-op if it already ran.
    """

    def __init__(self, engine: PersistenceEngine) -> None:
        self._engine = engine
        self._performed = False
        self._installed = False

    @property
    def performed(self) -> bool:
        return self._performed

    def perform(self) -> None:
        """Save modified stores unless this already happened.

        Raises
        ------
        OSError, FormatError
            Whatever saving raises.  The hook is then not considered
            performed, so a later call retries.
        """
        if self._performed:
            return
        logger.debug("Performing shutdown tasks")
        self._engine.save()
        self._performed = True

    def install(self) -> None:
        """Register ``perform`` to run at interpreter exit."""
        if not self._installed:
            atexit.register(self._run_at_exit)
            self._installed = True

    def uninstall(self) -> None:
        if self._installed:
            atexit.unregister(self._run_at_exit)
            self._installed = False

    def _run_at_exit(self) -> None:
        try:
            self.perform()
        except Exception:
            logger.exception("Failed to save commands and associations at exit")
