"""Scoped registration of a creator with a solver factory."""
from __future__ import annotations

import logging
from typing import Optional

from optifactory.core.creator import AbstractAlgorithmCreator
from optifactory.core.factory import SolverFactory

logger = logging.getLogger(__name__)


class RegistrationGuard:
    """Registers a creator on construction and removes it on :meth:`release`.

    The guard remembers the factory it registered with, so releasing it after
    ``SolverFactory.destroy()`` never touches the newly created instance.
    """

    def __init__(self, creator: AbstractAlgorithmCreator,
                 factory: Optional[SolverFactory] = None):
        self._creator = creator
        self._factory = factory if factory is not None else SolverFactory.instance()
        logger.debug("Registering %s of type %s",
                     creator.get_property().name, type(creator).__qualname__)
        self._registered = self._factory.register_solver(creator)
        self._active = True

    @property
    def creator(self) -> AbstractAlgorithmCreator:
        return self._creator

    @property
    def factory(self) -> SolverFactory:
        return self._factory

    @property
    def registered(self) -> bool:
        """Whether the factory accepted the creator."""
        return self._registered

    @property
    def active(self) -> bool:
        return self._active

    def release(self) -> None:
        if not self._active:
            return
        logger.debug("Unregistering %s", self._creator.get_property().name)
        self._factory.unregister_solver(self._creator)
        self._active = False

    def __enter__(self) -> "RegistrationGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "active" if self._active else "released"
        return "<RegistrationGuard %r %s>" % (self._creator.get_property().name, state)
