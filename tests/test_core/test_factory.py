from __future__ import annotations

import io

import pytest

from conftest import DummyAlgorithm, DummyCreator
from optifactory.core.event_bus import EventBus
from optifactory.core.factory import SolverFactory


class TestSingleton:
    def test_instance_is_shared(self):
        assert SolverFactory.instance() is SolverFactory.instance()

    def test_destroy_gives_fresh_empty_registry(self):
        first = SolverFactory.instance()
        first.register_solver(DummyCreator("A"))
        SolverFactory.destroy()
        second = SolverFactory.instance()
        assert second is not first
        assert len(second) == 0

    def test_destroy_keeps_creators_alive(self):
        creator = DummyCreator("A")
        SolverFactory.instance().register_solver(creator)
        SolverFactory.destroy()
        assert creator.construct().built_by == "A"

    def test_destroy_twice_is_harmless(self):
        SolverFactory.destroy()
        SolverFactory.destroy()
        assert len(SolverFactory.instance()) == 0


class TestRegistration:
    def test_register_and_list_in_order(self, factory):
        for name in ("B", "A", "C"):
            assert factory.register_solver(DummyCreator(name))
        assert factory.solver_names() == ["B", "A", "C"]

    def test_duplicate_name_first_wins(self, factory):
        first = DummyCreator("A", desc="first")
        second = DummyCreator("A", desc="second")
        assert factory.register_solver(first) is True
        assert factory.register_solver(second) is False
        assert factory.find_solver("A") is first
        assert len(factory) == 1

    def test_duplicate_is_logged(self, factory, caplog):
        factory.register_solver(DummyCreator("A"))
        with caplog.at_level("WARNING"):
            factory.register_solver(DummyCreator("A"))
        assert "'A'" in caplog.text

    def test_unregister_by_identity(self, factory):
        creator = DummyCreator("A")
        factory.register_solver(creator)
        assert factory.unregister_solver(creator) is True
        assert factory.construct("A") is None

    def test_unregister_other_creator_with_same_name_is_noop(self, factory):
        registered = DummyCreator("A")
        impostor = DummyCreator("A")
        factory.register_solver(registered)
        assert factory.unregister_solver(impostor) is False
        assert factory.find_solver("A") is registered

    def test_unregister_absent_is_noop(self, factory):
        assert factory.unregister_solver(DummyCreator("ghost")) is False

    def test_name_free_again_after_unregister(self, factory):
        old = DummyCreator("A")
        new = DummyCreator("A")
        factory.register_solver(old)
        factory.unregister_solver(old)
        assert factory.register_solver(new)
        assert factory.find_solver("A") is new


class TestConstruct:
    def test_construct_known_tag(self, factory):
        creator = DummyCreator("B", type="Gauss-Newton", pose_dim=3, landmark_dim=2)
        factory.register_solver(DummyCreator("A"))
        factory.register_solver(creator)
        result = factory.construct("B")
        assert result is not None
        algorithm, prop = result
        assert isinstance(algorithm, DummyAlgorithm)
        assert algorithm.built_by == "B"
        assert prop == creator.get_property()
        assert prop.name == "B"
        assert prop.pose_dim == 3

    def test_each_construct_builds_new_instance(self, factory):
        creator = DummyCreator("A")
        factory.register_solver(creator)
        a = factory.construct("A").algorithm
        b = factory.construct("A").algorithm
        assert a is not b
        assert creator.constructed == 2

    def test_unknown_tag_returns_none(self, factory):
        creator = DummyCreator("A")
        factory.register_solver(creator)
        assert factory.construct("does-not-exist") is None
        assert len(factory) == 1
        assert creator.constructed == 0

    def test_lookup_is_case_sensitive(self, factory):
        factory.register_solver(DummyCreator("lm_dense"))
        assert factory.construct("LM_DENSE") is None
        assert "lm_dense" in factory
        assert "LM_DENSE" not in factory

    def test_scenario_a_b(self, factory):
        factory.register_solver(DummyCreator("A"))
        factory.register_solver(DummyCreator("B"))
        out = io.StringIO()
        factory.list_solvers(out)
        lines = out.getvalue().splitlines()
        assert [line.split()[0] for line in lines] == ["A", "B"]
        algorithm, prop = factory.construct("B")
        assert algorithm.built_by == "B"
        assert prop.name == "B"
        assert factory.construct("C") is None


class TestListing:
    def test_columns_aligned(self, factory):
        factory.register_solver(DummyCreator("gn", desc="Gauss-Newton"))
        factory.register_solver(DummyCreator("lm_long", desc="Levenberg"))
        out = io.StringIO()
        factory.list_solvers(out)
        assert out.getvalue() == (
            "gn         Gauss-Newton\n"
            "lm_long    Levenberg\n"
        )

    def test_empty_registry_prints_nothing(self, factory):
        out = io.StringIO()
        factory.list_solvers(out)
        assert out.getvalue() == ""

    def test_defaults_to_stdout(self, factory, capsys):
        factory.register_solver(DummyCreator("A"))
        factory.list_solvers()
        assert capsys.readouterr().out.startswith("A")

    def test_creator_list(self, factory):
        a, b = DummyCreator("A"), DummyCreator("B")
        factory.register_solver(a)
        factory.register_solver(b)
        assert factory.creator_list() == (a, b)


class TestEvents:
    def test_lifecycle_events(self):
        bus = EventBus(keep_history=True)
        factory = SolverFactory(event_bus=bus)
        creator = DummyCreator("A")
        factory.register_solver(creator)
        factory.register_solver(DummyCreator("A"))
        factory.construct("A")
        factory.construct("missing")
        factory.unregister_solver(creator)
        assert [rec["event"] for rec in bus.get_history()] == [
            "solver.registered",
            "solver.rejected",
            "solver.constructed",
            "solver.not_found",
            "solver.unregistered",
        ]
