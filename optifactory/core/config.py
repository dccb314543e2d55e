"""Global configuration manager using YAML."""
from __future__ import annotations

import copy
import os
from typing import Any, Optional

import yaml

CONFIG_ENV_VAR = "OPTIFACTORY_CONFIG"

DEFAULT_CONFIG = {
    "app": {"name": "OptiFactory", "version": "0.1.0"},
    "logging": {"dir": None, "level": "INFO"},
    "solvers": {
        "libraries": ["dense", "cholesky"],
        "default": "lm_dense",
        "max_iterations": 100,
        "tolerance": 1e-10,
        "entry_point_group": "optifactory.solver_libraries",
        "discover_entry_points": False,
    },
}


class AppConfig:
    def __init__(self, config_path: Optional[str] = None):
        self._data: dict = {}
        self._deep_merge(self._data, copy.deepcopy(DEFAULT_CONFIG))
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR)
        self._path = config_path
        if config_path and os.path.exists(config_path):
            with open(config_path, "r", encoding="utf-8") as f:
                file_data = yaml.safe_load(f) or {}
            self._deep_merge(self._data, file_data)

    def _deep_merge(self, base: dict, override: dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, dotted_key: str, default: Any = None) -> Any:
        keys = dotted_key.split(".")
        node = self._data
        for k in keys:
            if isinstance(node, dict) and k in node:
                node = node[k]
            else:
                return default
        return node

    def set(self, dotted_key: str, value: Any) -> None:
        keys = dotted_key.split(".")
        node = self._data
        for k in keys[:-1]:
            if k not in node or not isinstance(node[k], dict):
                node[k] = {}
            node = node[k]
        node[keys[-1]] = value

    @property
    def solver_libraries(self) -> list[str]:
        """Libraries to activate at startup, in activation order."""
        return list(self.get("solvers.libraries") or [])

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def data(self) -> dict:
        return self._data
