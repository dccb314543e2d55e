"""Plugin standard interfaces (ABCs) for OptiFactory solver libraries."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from optifactory.core.creator import AbstractAlgorithmCreator
from optifactory.core.factory import SolverFactory
from optifactory.core.registration import RegistrationGuard

logger = logging.getLogger(__name__)


@dataclass
class PluginInfo:
    name: str
    version: str
    description: str
    author: str
    dependencies: list = field(default_factory=list)


class PluginBase(ABC):
    @abstractmethod
    def get_info(self) -> PluginInfo:
        ...

    @abstractmethod
    def activate(self, context: Any) -> None:
        ...

    @abstractmethod
    def deactivate(self) -> None:
        ...

    def get_config_schema(self) -> Optional[dict]:
        return None


class SolverLibraryPlugin(PluginBase):
    """A library of related solvers registered and removed as one unit.

    Subclasses build their creators in :meth:`create_creators`.  Activation
    registers each creator through a :class:`RegistrationGuard` with the
    ``solver_factory`` found in the activation context (the process-wide
    factory when absent); deactivation releases every guard.
    """

    def __init__(self):
        self._creators: Optional[list] = None
        self._guards: list[RegistrationGuard] = []
        self._factory: Optional[SolverFactory] = None
        self._active = False

    @abstractmethod
    def create_creators(self) -> list[AbstractAlgorithmCreator]:
        ...

    @property
    def creators(self) -> list[AbstractAlgorithmCreator]:
        if self._creators is None:
            self._creators = list(self.create_creators())
        return self._creators

    def provides(self) -> list[str]:
        return [c.get_property().name for c in self.creators]

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def registered_solvers(self) -> list[str]:
        return [g.creator.get_property().name for g in self._guards if g.registered]

    @property
    def solver_factory(self) -> Optional[SolverFactory]:
        """The factory the library is registered with while active."""
        return self._factory

    def activate(self, context: Any) -> None:
        factory = context.get("solver_factory") if isinstance(context, dict) else None
        if factory is None:
            factory = SolverFactory.instance()
        if self._active:
            if factory is self._factory:
                return
            raise RuntimeError(
                f"Solver library '{self.get_info().name}' is already active in "
                f"another factory; deactivate it first"
            )
        self._factory = factory
        for creator in self.creators:
            guard = RegistrationGuard(creator, factory)
            if not guard.registered:
                logger.warning("Library %r could not register solver %r",
                               self.get_info().name, creator.get_property().name)
            self._guards.append(guard)
        self._active = True

    def deactivate(self) -> None:
        for guard in reversed(self._guards):
            guard.release()
        self._guards.clear()
        self._factory = None
        self._active = False
