from .Vec2 import Vec2


class Point:
    """A cloth particle integrated with position Verlet.

    Velocity is never stored; it is the difference between ``pos`` and
    ``prev_pos``. ``index`` is the point's slot in ``ClothSimulation.points``
    and is rewritten by the simulation whenever the point is relocated.
    """

    def __init__(self, pos, index=-1, pinned=False):
        self.pos = Vec2.of(pos)
        self.prev_pos = self.pos.copy()
        self.pinned = bool(pinned)

        self.attached_constraints = 0
        self.index = index

    @property
    def velocity(self):
        return self.pos - self.prev_pos

    def move_to(self, pos):
        """Place the point at ``pos`` at rest."""
        self.pos = Vec2.of(pos)
        self.prev_pos = self.pos.copy()

    def update_position(self, gravity, dt, velocity_retention):
        if self.pinned:
            return

        vx = (self.pos.x - self.prev_pos.x) * velocity_retention
        vy = (self.pos.y - self.prev_pos.y) * velocity_retention
        self.prev_pos.x = self.pos.x
        self.prev_pos.y = self.pos.y
        self.pos.x += vx + gravity.x * dt * dt
        self.pos.y += vy + gravity.y * dt * dt

    def handle_boundary_collision(self, min_x, max_x, min_y, max_y, restitution):
        """Clamp into the box and bounce the implicit velocity off each violated wall."""
        if self.pinned:
            return

        vx = self.pos.x - self.prev_pos.x
        vy = self.pos.y - self.prev_pos.y

        if self.pos.x < min_x:
            self.pos.x = min_x
            self.prev_pos.x = self.pos.x + vx * restitution
        if self.pos.x > max_x:
            self.pos.x = max_x
            self.prev_pos.x = self.pos.x + vx * restitution
        if self.pos.y < min_y:
            self.pos.y = min_y
            self.prev_pos.y = self.pos.y + vy * restitution
        if self.pos.y > max_y:
            self.pos.y = max_y
            self.prev_pos.y = self.pos.y + vy * restitution

    def to_tuple(self):
        return (self.pos.x, self.pos.y)

    def __repr__(self):
        return (f"Point(pos=({self.pos.x:.2f}, {self.pos.y:.2f}), index={self.index}, "
                f"pinned={self.pinned}, attached={self.attached_constraints})")

    def __str__(self):
        return self.__repr__()
