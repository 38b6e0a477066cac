import math


class TwoPointConstraint:
    """Base class for constraints involving two points."""
    def __init__(self, p1, p2):
        self.p1 = p1
        self.p2 = p2

    def current_length(self):
        return math.hypot(self.p2.pos.x - self.p1.pos.x, self.p2.pos.y - self.p1.pos.y)

    def relax(self, snap_ratio, stiffness, correct_compression):
        """Move the endpoints towards satisfying the constraint. To be implemented by subclasses."""
        raise NotImplementedError("Subclasses should implement this method.")

    def __repr__(self):
        return f"<{self.__class__.__name__} p1={self.p1} p2={self.p2}>"

    def __str__(self):
        return self.__repr__()
