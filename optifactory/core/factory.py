"""Solver factory -- create optimization algorithms from their short name.

Usage::

    from optifactory.core.factory import SolverFactory

    factory = SolverFactory.instance()
    result = factory.construct("lm_dense")
    if result is None:
        factory.list_solvers()
    else:
        algorithm, prop = result

The process-wide instance is created lazily by :meth:`SolverFactory.instance`
and dropped by :meth:`SolverFactory.destroy`.  Hosts that prefer to pass the
registry around explicitly can simply build their own ``SolverFactory()``.

The factory keeps non-owning references to creators in registration order.
It is not thread-safe; register and unregister while nothing else uses it.
"""
from __future__ import annotations

import dataclasses
import logging
import sys
from typing import ClassVar, Optional, TextIO

from optifactory.core import event_bus as events
from optifactory.core.creator import AbstractAlgorithmCreator
from optifactory.core.event_bus import EventBus
from optifactory.core.models import ConstructResult

logger = logging.getLogger(__name__)

_NAME_COLUMN_PADDING = 4


class SolverFactory:
    _instance: ClassVar[Optional["SolverFactory"]] = None

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._creators: list[AbstractAlgorithmCreator] = []
        self.event_bus = event_bus

    # -- singleton lifecycle -------------------------------------------------

    @classmethod
    def instance(cls) -> "SolverFactory":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def destroy(cls) -> None:
        """Drop the process-wide factory.  Registered creators are untouched."""
        cls._instance = None

    # -- registration --------------------------------------------------------

    def register_solver(self, creator: AbstractAlgorithmCreator) -> bool:
        """Register *creator* under its property name.

        The first registration of a name wins: a later creator with the same
        name is rejected and ``False`` is returned.
        """
        name = creator.get_property().name
        existing = self.find_solver(name)
        if existing is not None:
            logger.warning(
                "Rejecting solver creator %r (%s): name already registered by %s",
                name,
                type(creator).__name__,
                type(existing).__name__,
            )
            self._emit(events.SOLVER_REJECTED, {
                "name": name,
                "creator": type(creator).__qualname__,
                "existing": type(existing).__qualname__,
            })
            return False
        self._creators.append(creator)
        self._emit(events.SOLVER_REGISTERED, {
            "name": name, "creator": type(creator).__qualname__,
        })
        return True

    def unregister_solver(self, creator: AbstractAlgorithmCreator) -> bool:
        """Remove exactly *creator* (by identity).  Absent creators are ignored."""
        for idx, registered in enumerate(self._creators):
            if registered is creator:
                del self._creators[idx]
                self._emit(events.SOLVER_UNREGISTERED, {
                    "name": creator.get_property().name,
                })
                return True
        return False

    # -- lookup --------------------------------------------------------------

    def find_solver(self, name: str) -> Optional[AbstractAlgorithmCreator]:
        for creator in self._creators:
            if creator.get_property().name == name:
                return creator
        return None

    def construct(self, tag: str) -> Optional[ConstructResult]:
        """Build the solver registered as *tag*, e.g. ``gn_dense``.

        Returns the new instance together with a copy of the matched
        property, or ``None`` if no creator carries that name.
        """
        creator = self.find_solver(tag)
        if creator is None:
            logger.warning("Unable to create solver %r: no such solver registered", tag)
            self._emit(events.SOLVER_NOT_FOUND, {"name": tag})
            return None
        algorithm = creator.construct()
        prop = dataclasses.replace(creator.get_property())
        self._emit(events.SOLVER_CONSTRUCTED, {
            "name": tag, "algorithm": type(algorithm).__qualname__,
        })
        return ConstructResult(algorithm=algorithm, property=prop)

    def list_solvers(self, output: Optional[TextIO] = None) -> None:
        """Write one ``name  description`` line per solver, in registration order."""
        out = output if output is not None else sys.stdout
        width = max((len(c.get_property().name) for c in self._creators), default=0)
        width += _NAME_COLUMN_PADDING
        for creator in self._creators:
            prop = creator.get_property()
            out.write("%s%s\n" % (prop.name.ljust(width), prop.desc))

    def creator_list(self) -> tuple:
        return tuple(self._creators)

    def solver_names(self) -> list[str]:
        return [c.get_property().name for c in self._creators]

    def __len__(self) -> int:
        return len(self._creators)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find_solver(name) is not None

    def __repr__(self) -> str:
        return "<SolverFactory solvers=%s>" % self.solver_names()

    def _emit(self, event: str, data: dict) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(event, data)
