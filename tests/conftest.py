from __future__ import annotations

import pytest

from optifactory.core.creator import AbstractAlgorithmCreator
from optifactory.core.factory import SolverFactory
from optifactory.core.libraries import reset_declarations
from optifactory.core.models import AlgorithmProperty


class DummyAlgorithm:
    def __init__(self, built_by: str):
        self.built_by = built_by


class DummyCreator(AbstractAlgorithmCreator):
    def __init__(self, name: str, desc: str = "", **fields):
        super().__init__(AlgorithmProperty(name=name, desc=desc or "solver %s" % name, **fields))
        self.constructed = 0

    def construct(self):
        self.constructed += 1
        return DummyAlgorithm(self.get_property().name)


@pytest.fixture(autouse=True)
def _isolated_registry():
    SolverFactory.destroy()
    reset_declarations()
    yield
    SolverFactory.destroy()
    reset_declarations()


@pytest.fixture
def factory():
    return SolverFactory()
