import math

from .DistanceConstraint import ConstraintType, DistanceConstraint
from .Point import Point
from .Vec2 import Vec2
from .params import validate_layout


class ClothGrid:
    def __init__(self, rows, columns, spacing, origin_x=0.0, origin_y=0.0, pin_top_row=True):
        """
        A rectangular rows x columns lattice of points joined by distance constraints.
        """
        validate_layout(rows, columns, spacing)
        self.rows = int(rows)
        self.columns = int(columns)
        self.spacing = float(spacing)
        self.origin = Vec2(origin_x, origin_y)
        self.pin_top_row = bool(pin_top_row)

    def index_of(self, row, column):
        return row * self.columns + column

    def build(self):
        """
        Create the points and constraints of the grid, in row-major order.

        Each point links back to neighbours that already exist: structural
        links to the left and upper neighbours, hidden bend links two columns
        left and two rows up, shear links to both upper diagonals. Returns
        ``(points, constraints)`` with every point's ``attached_constraints``
        already counted.
        """
        points = []
        constraints = []
        spacing = self.spacing
        diagonal = math.sqrt(2) * spacing

        for row in range(self.rows):
            for column in range(self.columns):
                i = self.index_of(row, column)
                pos = Vec2(column * spacing + self.origin.x, row * spacing + self.origin.y)
                point = Point(pos, index=i, pinned=self.pin_top_row and row == 0)
                points.append(point)

                # Structural constraints (left and up)
                if column > 0:
                    constraints.append(DistanceConstraint(
                        point, points[self.index_of(row, column - 1)], spacing, ConstraintType.STRUCTURAL))
                if row > 0:
                    constraints.append(DistanceConstraint(
                        point, points[self.index_of(row - 1, column)], spacing, ConstraintType.STRUCTURAL))

                # Bend constraints skip one point and are not drawn
                if row >= 2:
                    constraints.append(DistanceConstraint(
                        point, points[self.index_of(row - 2, column)], 2 * spacing, ConstraintType.BEND, hidden=True))
                if column >= 2:
                    constraints.append(DistanceConstraint(
                        point, points[self.index_of(row, column - 2)], 2 * spacing, ConstraintType.BEND, hidden=True))

                # Shear constraints (upper diagonals)
                if column > 0 and row > 0:
                    constraints.append(DistanceConstraint(
                        point, points[self.index_of(row - 1, column - 1)], diagonal, ConstraintType.SHEAR))
                if column < self.columns - 1 and row > 0:
                    constraints.append(DistanceConstraint(
                        point, points[self.index_of(row - 1, column + 1)], diagonal, ConstraintType.SHEAR))

        for c in constraints:
            c.p1.attached_constraints += 1
            c.p2.attached_constraints += 1

        return points, constraints

    def expected_constraint_count(self):
        """Number of constraints ``build`` produces for this grid size."""
        r, c = self.rows, self.columns
        structural = r * (c - 1) + (r - 1) * c
        bend = max(r - 2, 0) * c + r * max(c - 2, 0)
        shear = 2 * (r - 1) * (c - 1)
        return structural + bend + shear

    def __repr__(self):
        return (f"<ClothGrid rows={self.rows} columns={self.columns} spacing={self.spacing} "
                f"origin=({self.origin.x}, {self.origin.y}) pin_top_row={self.pin_top_row}>")
