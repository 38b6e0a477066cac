"""Mutations an interaction layer may apply between frames.

Cutting only flags constraints as broken; the solver deletes them (and any
point left without constraints) on its next relaxation pass, exactly as if
they had snapped.
"""

import logging

import numpy as np

logger = logging.getLogger("clothsim")


def segment_distances(segments, x, y):
    """
    Distance from (x, y) to each segment of an (M, 2, 2) array.

    The closest-point parameter is clamped to [0, 1]; degenerate segments
    measure the distance to their single point.
    """
    a = segments[:, 0, :]
    d = segments[:, 1, :] - a
    rel = np.array([x, y], dtype=np.float64) - a
    length_sq = np.einsum("ij,ij->i", d, d)
    dot = np.einsum("ij,ij->i", rel, d)
    t = np.divide(dot, length_sq, out=np.zeros_like(dot), where=length_sq > 0.0)
    t = np.clip(t, 0.0, 1.0)
    closest = a + d * t[:, None]
    return np.hypot(x - closest[:, 0], y - closest[:, 1])


def cut(simulation, x, y, radius):
    """
    Mark every live constraint passing within ``radius`` of (x, y) as broken.
    Hidden constraints are cut too. Returns the number of constraints newly marked.
    """
    constraints = simulation.constraints
    if not constraints or radius <= 0.0:
        return 0
    segments = simulation.segments(include_hidden=True)
    hits = np.nonzero(segment_distances(segments, x, y) < radius)[0]

    marked = 0
    for k in hits:
        c = constraints[int(k)]
        if not c.broken:
            c.broken = True
            marked += 1
    if marked:
        logger.debug(f"Cut at ({x:.1f}, {y:.1f}) r={radius:g}: {marked} constraints marked")
    return marked


def cut_along(simulation, x0, y0, x1, y1, radius, samples=None):
    """
    Cut along the pointer path from (x0, y0) to (x1, y1).

    The path is sampled so consecutive cut circles overlap; ``samples``
    overrides the automatic count.
    """
    if radius <= 0.0:
        return 0
    if samples is None:
        length = float(np.hypot(x1 - x0, y1 - y0))
        samples = max(2, int(np.ceil(length / radius)) + 1)
    marked = 0
    for t in np.linspace(0.0, 1.0, int(samples)):
        marked += cut(simulation, x0 + (x1 - x0) * t, y0 + (y1 - y0) * t, radius)
    return marked


def drag_obstacle(simulation, x, y):
    """Move the obstacle centre to (x, y). Returns False when there is no obstacle."""
    if simulation.obstacle is None:
        return False
    simulation.obstacle.move_to(x, y)
    return True
