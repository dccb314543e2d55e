from __future__ import annotations

import pytest

from optifactory.core.config import AppConfig, DEFAULT_CONFIG


class TestConfig:
    def test_default_config(self):
        config = AppConfig()
        assert config.get("app.name") == "OptiFactory"
        assert config.get("app.version") == "0.1.0"
        assert config.solver_libraries == ["dense", "cholesky"]
        assert config.get("logging.dir") is None

    def test_load_from_file(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("solvers:\n  libraries: [cholesky]\n  default: gn_cholesky\n")
        config = AppConfig(str(cfg_file))
        assert config.solver_libraries == ["cholesky"]
        assert config.get("solvers.default") == "gn_cholesky"
        assert config.get("solvers.max_iterations") == 100

    def test_empty_file(self, tmp_path):
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("")
        assert AppConfig(str(cfg_file)).get("app.name") == "OptiFactory"

    def test_path_from_environment(self, tmp_path, monkeypatch):
        cfg_file = tmp_path / "env.yaml"
        cfg_file.write_text("app:\n  name: FromEnv\n")
        monkeypatch.setenv("OPTIFACTORY_CONFIG", str(cfg_file))
        config = AppConfig()
        assert config.get("app.name") == "FromEnv"
        assert config.path == str(cfg_file)

    def test_missing_file_uses_defaults(self, tmp_path):
        config = AppConfig(str(tmp_path / "absent.yaml"))
        assert config.get("solvers.default") == "lm_dense"

    def test_get_with_default(self):
        assert AppConfig().get("nonexistent.key", "fallback") == "fallback"

    def test_set_value(self):
        config = AppConfig()
        config.set("custom.key", "hello")
        assert config.get("custom.key") == "hello"

    def test_set_does_not_leak_into_defaults(self):
        AppConfig().set("solvers.libraries", ["dense"])
        assert DEFAULT_CONFIG["solvers"]["libraries"] == ["dense", "cholesky"]
        assert AppConfig().solver_libraries == ["dense", "cholesky"]
