import math


class Vec2:
    """Mutable 2-D vector. Points update their components in place."""

    __slots__ = ("x", "y")

    def __init__(self, x=0.0, y=0.0):
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def of(cls, value):
        """Build a Vec2 from another Vec2, an (x, y) pair or an {x, y} mapping."""
        if isinstance(value, Vec2):
            return value.copy()
        if isinstance(value, dict):
            return cls(value["x"], value["y"])
        x, y = value
        return cls(x, y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def length(self):
        return math.hypot(self.x, self.y)

    def set(self, x, y):
        self.x = float(x)
        self.y = float(y)

    def copy(self):
        return Vec2(self.x, self.y)

    def __eq__(self, other):
        if other is None or not isinstance(other, Vec2):
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Vec2({self.x:.3f}, {self.y:.3f})"
