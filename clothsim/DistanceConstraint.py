import math
from enum import Enum
from typing import NamedTuple

from .TwoPointConstraint import TwoPointConstraint
from .exceptions import InvalidConfigurationError


class ConstraintType(Enum):
    STRUCTURAL = "structural"
    BEND = "bend"
    SHEAR = "shear"


class RelaxPolicy(NamedTuple):
    stiffness_field: str
    correct_compression: bool


# Bend links also push apart so the mesh cannot fold flat onto itself.
POLICIES = {
    ConstraintType.STRUCTURAL: RelaxPolicy("structural", False),
    ConstraintType.BEND: RelaxPolicy("bend", True),
    ConstraintType.SHEAR: RelaxPolicy("shear", False),
}


def policy_for(constraint_type, stiffness):
    """Return ``(stiffness, correct_compression)`` for a constraint type.

    ``stiffness`` is any object exposing ``structural``, ``bend`` and ``shear``
    attributes (see ``clothsim.params.Stiffness``).
    """
    policy = POLICIES[constraint_type]
    return getattr(stiffness, policy.stiffness_field), policy.correct_compression


class DistanceConstraint(TwoPointConstraint):
    def __init__(self, p1, p2, rest_length, constraint_type=ConstraintType.STRUCTURAL, hidden=False):
        if not rest_length > 0.0:
            raise InvalidConfigurationError(
                "rest_length", rest_length, f"Rest length must be positive, got {rest_length!r}")
        super().__init__(p1, p2)
        self.rest_length = float(rest_length)
        self.constraint_type = ConstraintType(constraint_type)
        # hidden links take part in the solve but renderers skip them
        self.hidden = bool(hidden)
        self.broken = False

    def stretch(self):
        return self.current_length() / self.rest_length

    def relax(self, snap_ratio, stiffness, correct_compression):
        """Single Gauss-Seidel projection towards ``rest_length``.

        Corrections are written straight into the endpoint positions so later
        constraints in the same pass see them. A constraint stretched to
        ``snap_ratio`` times its rest length or beyond is flagged ``broken``
        and left uncorrected.
        """
        p1 = self.p1
        p2 = self.p2
        dx = p2.pos.x - p1.pos.x
        dy = p2.pos.y - p1.pos.y

        length = math.hypot(dx, dy)
        if length <= self.rest_length and not correct_compression:
            return
        if length / self.rest_length >= snap_ratio:
            self.broken = True
            return
        if length == 0.0:
            return

        relative_difference = (self.rest_length - length) / length

        w1 = 0.0 if p1.pinned else 1.0
        w2 = 0.0 if p2.pinned else 1.0
        w_sum = w1 + w2
        if w_sum == 0.0:
            return

        share1 = relative_difference * (w1 / w_sum) * stiffness
        share2 = relative_difference * (w2 / w_sum) * stiffness

        p1.pos.x -= dx * share1
        p1.pos.y -= dy * share1
        p2.pos.x += dx * share2
        p2.pos.y += dy * share2

    def __repr__(self):
        return (f"<DistanceConstraint {self.constraint_type.value} rest={self.rest_length:.3f} "
                f"broken={self.broken} p1={self.p1.index} p2={self.p2.index}>")
