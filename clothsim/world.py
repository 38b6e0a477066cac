import logging

import numpy as np

from .DistanceConstraint import ConstraintType, DistanceConstraint, policy_for
from .cloth import ClothGrid
from .collision import CircleObstacle
from .exceptions import InvalidConfigurationError, SimulationStateError
from .params import SimulationParameters

logger = logging.getLogger("clothsim")


class ClothSimulation:
    def __init__(self, width, height, parameters=None, obstacle=None):
        if not width > 0:
            raise InvalidConfigurationError("width", width)
        if not height > 0:
            raise InvalidConfigurationError("height", height)
        self.width = float(width)
        self.height = float(height)
        self.parameters = (parameters if parameters is not None else SimulationParameters()).validate()

        self.points = []
        self.constraints = []
        self.obstacle = obstacle
        self.frame = 0

        # counters for the most recent step()
        self._torn_last_step = 0
        self._removed_last_step = 0

    @classmethod
    def from_scene(cls, scene):
        """Create and build a simulation from a ``clothsim.params.Scene``."""
        scene.validate()
        sim = cls(scene.width, scene.height, scene.parameters)
        sim.build_layout(scene.layout)
        if scene.obstacle is not None:
            o = scene.obstacle
            sim.set_obstacle(o.x, o.y, o.radius, o.restitution)
        return sim

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def build(self, rows, columns, spacing, origin_x=0.0, origin_y=0.0, pin_top_row=True):
        """
        Discard the current cloth and lay out a fresh rows x columns grid.

        :param rows: Number of point rows (>= 1).
        :param columns: Number of point columns (>= 1).
        :param spacing: Rest distance between neighbouring points (> 0).
        :param origin_x: x-position of the top-left point.
        :param origin_y: y-position of the top-left point.
        :param pin_top_row: Pin every point of row 0.
        :return: The ClothGrid describing the layout.
        """
        grid = ClothGrid(rows, columns, spacing, origin_x, origin_y, pin_top_row)

        # clear in place so renderers holding the lists keep valid references
        self.points.clear()
        self.constraints.clear()
        points, constraints = grid.build()
        self.points.extend(points)
        self.constraints.extend(constraints)
        self.frame = 0

        logger.info(f"Built {grid.rows}x{grid.columns} cloth: "
                    f"{len(self.points)} points, {len(self.constraints)} constraints")
        return grid

    def build_layout(self, layout):
        layout.validate()
        return self.build(layout.rows, layout.columns, layout.spacing,
                          layout.origin_x, layout.origin_y, layout.pin_top_row)

    def add_constraint(self, p1, p2, rest_length=None, constraint_type=ConstraintType.STRUCTURAL, hidden=False):
        """Link two live points; rest length defaults to their current distance."""
        for p in (p1, p2):
            if not (0 <= p.index < len(self.points) and self.points[p.index] is p):
                raise SimulationStateError(f"{p!r} is not a live point of this simulation", point_index=p.index)
        if p1 is p2:
            raise InvalidConfigurationError("p2", p2, "A constraint needs two distinct points")
        if rest_length is None:
            rest_length = (p2.pos - p1.pos).length()
        c = DistanceConstraint(p1, p2, rest_length, constraint_type, hidden)
        self.constraints.append(c)
        p1.attached_constraints += 1
        p2.attached_constraints += 1
        return c

    # ------------------------------------------------------------------
    # Obstacle
    # ------------------------------------------------------------------

    def set_obstacle(self, x, y, radius, restitution=None):
        if restitution is None:
            restitution = self.parameters.restitution
        self.obstacle = CircleObstacle((x, y), radius, restitution)
        logger.debug(f"Obstacle set: {self.obstacle!r}")
        return self.obstacle

    def clear_obstacle(self):
        self.obstacle = None

    # ------------------------------------------------------------------
    # Per-frame pipeline
    # ------------------------------------------------------------------

    def step(self, parameters=None):
        """
        Advance one frame: integrate once, then alternate constraint
        relaxation and collision handling ``solver_iterations`` times.
        """
        params = parameters if parameters is not None else self.parameters
        self._torn_last_step = 0
        self._removed_last_step = 0

        self.update_point_positions(params)
        for _ in range(params.solver_iterations):
            self.enforce_constraints(params)
            self.handle_collisions(params)
        self.frame += 1

        if self._torn_last_step:
            logger.debug(f"Frame {self.frame}: {self._torn_last_step} constraints broke, "
                         f"{self._removed_last_step} points removed")

    def update_point_positions(self, params=None):
        params = params if params is not None else self.parameters
        gravity = params.gravity
        dt = params.dt
        retention = params.velocity_retention
        for p in self.points:
            p.update_position(gravity, dt, retention)

    def enforce_constraints(self, params=None):
        """
        Relax every constraint once, deleting the ones that break.

        The list is walked from the end so that swap-pop removal only ever
        moves an already-visited constraint into the current slot.
        """
        params = params if params is not None else self.parameters
        snap_ratio = params.snap_ratio
        stiffness = params.stiffness
        constraints = self.constraints

        for i in range(len(constraints) - 1, -1, -1):
            c = constraints[i]
            k, correct_compression = policy_for(c.constraint_type, stiffness)
            c.relax(snap_ratio, k, correct_compression)

            if c.broken:
                self._torn_last_step += 1
                # both endpoints are handled through their own references,
                # so p2 is found even if removing p1 relocated it
                c.p1.attached_constraints -= 1
                if c.p1.attached_constraints == 0:
                    self.remove_point(c.p1)
                c.p2.attached_constraints -= 1
                if c.p2.attached_constraints == 0:
                    self.remove_point(c.p2)

                constraints[i] = constraints[-1]
                constraints.pop()

    def handle_collisions(self, params=None):
        params = params if params is not None else self.parameters
        restitution = params.restitution
        width = self.width
        height = self.height
        obstacle = self.obstacle
        for p in self.points:
            p.handle_boundary_collision(0.0, width, 0.0, height, restitution)
            if obstacle is not None:
                obstacle.collide(p)

    def remove_point(self, point):
        """O(1) swap-pop removal; the point moved into the hole gets its new index."""
        i = point.index
        last = len(self.points) - 1
        if not (0 <= i <= last and self.points[i] is point):
            raise SimulationStateError(f"{point!r} is not stored at its recorded slot", point_index=i)

        if i != last:
            moved = self.points[last]
            self.points[i] = moved
            moved.index = i
        self.points.pop()
        point.index = -1
        self._removed_last_step += 1

    # ------------------------------------------------------------------
    # Read access for renderers
    # ------------------------------------------------------------------

    def visible_constraints(self):
        return [c for c in self.constraints if not c.hidden]

    def positions(self):
        """Point positions as an (N, 2) float array, in slot order."""
        if not self.points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([(p.pos.x, p.pos.y) for p in self.points], dtype=np.float64)

    def segments(self, include_hidden=False):
        """Constraint endpoints as an (M, 2, 2) float array."""
        cs = self.constraints if include_hidden else self.visible_constraints()
        if not cs:
            return np.empty((0, 2, 2), dtype=np.float64)
        return np.array([((c.p1.pos.x, c.p1.pos.y), (c.p2.pos.x, c.p2.pos.y)) for c in cs],
                        dtype=np.float64)

    def stats(self):
        return {
            "frame": self.frame,
            "points": len(self.points),
            "constraints": len(self.constraints),
            "pinned": sum(1 for p in self.points if p.pinned),
            "torn_last_step": self._torn_last_step,
            "removed_last_step": self._removed_last_step,
        }

    def check_invariants(self):
        """
        Verify slot indices and attached-constraint counts.
        Raises SimulationStateError on the first inconsistency found.
        """
        for slot, p in enumerate(self.points):
            if p.index != slot:
                raise SimulationStateError(f"Point in slot {slot} records index {p.index}", point_index=slot)

        counts = {id(p): 0 for p in self.points}
        for c in self.constraints:
            for p in (c.p1, c.p2):
                if id(p) not in counts:
                    raise SimulationStateError(f"{c!r} references a removed point", point_index=p.index)
                counts[id(p)] += 1

        for p in self.points:
            if p.attached_constraints != counts[id(p)]:
                raise SimulationStateError(
                    f"Point {p.index} counts {p.attached_constraints} constraints, "
                    f"{counts[id(p)]} reference it", point_index=p.index)

    def __repr__(self):
        return (f"<ClothSimulation {self.width:g}x{self.height:g} points={len(self.points)} "
                f"constraints={len(self.constraints)} obstacle={self.obstacle!r}>")
