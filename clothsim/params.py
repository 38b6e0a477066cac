"""Configuration dataclasses for the cloth simulation.

``SimulationParameters`` is read by every ``ClothSimulation.step``; a control
panel may overwrite its fields between frames. ``ClothLayout`` only matters
when the cloth is (re)built, and ``Scene`` bundles both with the domain size
and an optional obstacle so a ready simulation can be produced in one call.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from .Vec2 import Vec2
from .exceptions import InvalidConfigurationError


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise InvalidConfigurationError(name, value, f"'{name}' must lie in [0, 1], got {value!r}")


@dataclass
class Stiffness:
    """Fraction of the length error corrected per relaxation, by constraint type."""

    structural: float = 1.0
    bend: float = 0.5
    shear: float = 0.8

    def validate(self) -> None:
        _check_unit_interval("stiffness.structural", self.structural)
        _check_unit_interval("stiffness.bend", self.bend)
        _check_unit_interval("stiffness.shear", self.shear)


@dataclass
class SimulationParameters:
    gravity: Vec2 = field(default_factory=lambda: Vec2(0.0, 400.0))
    dt: float = 0.016
    solver_iterations: int = 8
    # a link breaks once stretched to snap_ratio times its rest length
    snap_ratio: float = 4.0
    stiffness: Stiffness = field(default_factory=Stiffness)
    restitution: float = 0.9
    velocity_retention: float = 0.99

    def __post_init__(self) -> None:
        self.gravity = Vec2.of(self.gravity)
        if isinstance(self.stiffness, Mapping):
            self.stiffness = Stiffness(**self.stiffness)

    def validate(self) -> "SimulationParameters":
        if self.dt < 0.0:
            raise InvalidConfigurationError("dt", self.dt, f"'dt' must not be negative, got {self.dt!r}")
        if int(self.solver_iterations) != self.solver_iterations or self.solver_iterations < 1:
            raise InvalidConfigurationError(
                "solver_iterations", self.solver_iterations,
                f"'solver_iterations' must be a positive integer, got {self.solver_iterations!r}")
        self.solver_iterations = int(self.solver_iterations)
        if not self.snap_ratio > 1.0:
            raise InvalidConfigurationError(
                "snap_ratio", self.snap_ratio, f"'snap_ratio' must be greater than 1, got {self.snap_ratio!r}")
        self.stiffness.validate()
        _check_unit_interval("restitution", self.restitution)
        _check_unit_interval("velocity_retention", self.velocity_retention)
        return self

    # keys accepted from slider panels that use the browser naming
    _ALIASES = {
        "solverIterations": "solver_iterations",
        "snapRatio": "snap_ratio",
        "velocityRetention": "velocity_retention",
        "structuralStiffness": "structural",
        "bendStiffness": "bend",
        "shearStiffness": "shear",
        "structural_stiffness": "structural",
        "bend_stiffness": "bend",
        "shear_stiffness": "shear",
    }
    # read by no solver step; kept so scene files from the browser demo load
    _IGNORED = frozenset({"correctionFactor", "correction_factor"})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationParameters":
        """Build validated parameters from a flat or nested mapping."""
        kwargs: dict[str, Any] = {}
        stiffness: dict[str, float] = {}
        for key, value in data.items():
            if key in cls._IGNORED:
                continue
            name = cls._ALIASES.get(key, key)
            if name in ("structural", "bend", "shear"):
                stiffness[name] = float(value)
            elif name == "stiffness":
                stiffness.update({k: float(v) for k, v in dict(value).items()})
            elif name == "gravity":
                kwargs["gravity"] = Vec2.of(value)
            elif name in ("dt", "snap_ratio", "restitution", "velocity_retention"):
                kwargs[name] = float(value)
            elif name == "solver_iterations":
                kwargs[name] = int(value)
            else:
                raise InvalidConfigurationError(key, value, f"Unknown simulation parameter '{key}'")
        if stiffness:
            kwargs["stiffness"] = Stiffness(**stiffness)
        return cls(**kwargs).validate()


@dataclass
class ClothLayout:
    """Grid topology handed to ``ClothSimulation.build``."""

    rows: int = 30
    columns: int = 80
    spacing: float = 8.0
    origin_x: float = 100.0
    origin_y: float = 100.0
    pin_top_row: bool = True

    def validate(self) -> "ClothLayout":
        validate_layout(self.rows, self.columns, self.spacing)
        self.rows = int(self.rows)
        self.columns = int(self.columns)
        return self


def validate_layout(rows: int, columns: int, spacing: float) -> None:
    if int(rows) != rows or rows < 1:
        raise InvalidConfigurationError("rows", rows, f"'rows' must be a positive integer, got {rows!r}")
    if int(columns) != columns or columns < 1:
        raise InvalidConfigurationError("columns", columns, f"'columns' must be a positive integer, got {columns!r}")
    if not spacing > 0.0:
        raise InvalidConfigurationError("spacing", spacing, f"'spacing' must be positive, got {spacing!r}")


@dataclass
class ObstacleConfig:
    x: float
    y: float
    radius: float
    restitution: Optional[float] = None


@dataclass
class Scene:
    width: float = 800.0
    height: float = 600.0
    parameters: SimulationParameters = field(default_factory=SimulationParameters)
    layout: ClothLayout = field(default_factory=ClothLayout)
    obstacle: Optional[ObstacleConfig] = None

    def validate(self) -> "Scene":
        if not self.width > 0.0:
            raise InvalidConfigurationError("width", self.width)
        if not self.height > 0.0:
            raise InvalidConfigurationError("height", self.height)
        self.parameters.validate()
        self.layout.validate()
        return self
