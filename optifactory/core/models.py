"""Core data models for OptiFactory."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any


@dataclass(frozen=True)
class AlgorithmProperty:
    """Descriptive metadata of one solver variant.

    ``name`` is the tag the factory looks the solver up by.  ``pose_dim`` and
    ``landmark_dim`` are ``-1`` when the solver handles variable block sizes.
    """
    name: str = ""
    desc: str = ""
    type: str = ""
    requires_marginalize: bool = False
    pose_dim: int = -1
    landmark_dim: int = -1

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ConstructResult:
    """Algorithm instance built by the factory and the property it matched."""
    algorithm: Any
    property: AlgorithmProperty

    def __iter__(self):
        yield self.algorithm
        yield self.property
