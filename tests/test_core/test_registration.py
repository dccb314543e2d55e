from __future__ import annotations

import pytest

from conftest import DummyCreator
from optifactory.core.factory import SolverFactory
from optifactory.core.registration import RegistrationGuard


class TestRegistrationGuard:
    def test_registers_on_creation(self, factory):
        guard = RegistrationGuard(DummyCreator("A"), factory)
        assert guard.registered
        assert guard.active
        assert "A" in factory

    def test_release_unregisters(self, factory):
        guard = RegistrationGuard(DummyCreator("A"), factory)
        guard.release()
        assert "A" not in factory
        assert not guard.active

    def test_release_is_idempotent(self, factory):
        guard = RegistrationGuard(DummyCreator("A"), factory)
        guard.release()
        guard.release()
        assert len(factory) == 0

    def test_context_manager(self, factory):
        with RegistrationGuard(DummyCreator("A"), factory) as guard:
            assert factory.find_solver("A") is guard.creator
        assert "A" not in factory

    def test_context_manager_releases_on_error(self, factory):
        with pytest.raises(RuntimeError):
            with RegistrationGuard(DummyCreator("A"), factory):
                raise RuntimeError("boom")
        assert "A" not in factory

    def test_defaults_to_process_wide_factory(self):
        guard = RegistrationGuard(DummyCreator("A"))
        assert guard.factory is SolverFactory.instance()
        assert "A" in SolverFactory.instance()
        guard.release()
        assert "A" not in SolverFactory.instance()

    def test_rejected_guard_does_not_remove_winner(self, factory):
        winner = RegistrationGuard(DummyCreator("A"), factory)
        loser = RegistrationGuard(DummyCreator("A"), factory)
        assert not loser.registered
        loser.release()
        assert factory.find_solver("A") is winner.creator

    def test_release_only_touches_own_factory(self):
        guard = RegistrationGuard(DummyCreator("A"))
        SolverFactory.destroy()
        fresh = SolverFactory.instance()
        other = DummyCreator("A")
        fresh.register_solver(other)
        guard.release()
        assert fresh.find_solver("A") is other

    def test_release_removes_exactly_its_creator(self, factory):
        guard_a = RegistrationGuard(DummyCreator("A"), factory)
        RegistrationGuard(DummyCreator("B"), factory)
        RegistrationGuard(DummyCreator("C"), factory)
        guard_a.release()
        assert factory.solver_names() == ["B", "C"]

    def test_debug_diagnostic(self, factory, caplog):
        with caplog.at_level("DEBUG", logger="optifactory.core.registration"):
            RegistrationGuard(DummyCreator("A"), factory).release()
        assert "Registering A of type DummyCreator" in caplog.text
        assert "Unregistering A" in caplog.text
