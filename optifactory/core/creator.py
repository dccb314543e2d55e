"""Creators: the factory units that build one kind of algorithm."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from optifactory.core.models import AlgorithmProperty


class AbstractAlgorithmCreator(ABC):
    """Base for allocating an optimization algorithm.

    Subclasses implement :meth:`construct` to allocate the desired solver.
    The creator never talks to the registry itself.
    """

    def __init__(self, prop: AlgorithmProperty):
        self._property = prop

    def get_property(self) -> AlgorithmProperty:
        return self._property

    @abstractmethod
    def construct(self) -> Any:
        """Return a new algorithm instance owned by the caller."""
        ...

    def __repr__(self) -> str:
        return "<%s %r>" % (type(self).__name__, self._property.name)


class AlgorithmCreator(AbstractAlgorithmCreator):
    """Creator that delegates construction to a zero-argument builder."""

    def __init__(self, prop: AlgorithmProperty, builder: Callable[[], Any]):
        super().__init__(prop)
        self._builder = builder

    def construct(self) -> Any:
        return self._builder()
