"""
Quadratic curve helpers for spoke outlines.

Evaluation, flattening into polygons for the rasterizer, and SVG path data
for the vector backend.
"""

import math

import numpy as np

# Samples per curve when no tolerance is given.
DEFAULT_CURVE_STEPS = 6


def evaluate_quadratic(p0, ctrl, p1, t):
    """Evaluate a quadratic Bezier at parameter t."""
    p0 = np.asarray(p0, dtype=float)
    ctrl = np.asarray(ctrl, dtype=float)
    p1 = np.asarray(p1, dtype=float)

    omt = 1.0 - t
    return (omt * omt * p0 + 2.0 * omt * t * ctrl + t * t * p1).tolist()


def steps_for_tolerance(p0, ctrl, p1, tolerance):
    """
    Number of uniform line segments keeping a quadratic within tolerance.

    The chord error of a quadratic split into n equal parameter steps is
    |p0 - 2*ctrl + p1| / (4 * n^2).
    """
    dx = p0[0] - 2.0 * ctrl[0] + p1[0]
    dy = p0[1] - 2.0 * ctrl[1] + p1[1]
    deviation = math.hypot(dx, dy)
    if tolerance <= 0 or deviation == 0:
        return 1
    return max(1, int(math.ceil(math.sqrt(deviation / (4.0 * tolerance)))))


def flatten_outline(outline, steps=DEFAULT_CURVE_STEPS, tolerance=None):
    """
    Convert an outline into a list of [x, y] points.

    Curves are sampled either with a fixed step count or, when tolerance is
    set, with just enough steps to stay within it. A closed outline always
    ends on its starting point.
    """
    points = [list(outline.start)]

    for seg in outline.segments:
        if seg.kind == "line":
            points.append(list(seg.end))
            continue

        start = points[-1]
        n = steps if tolerance is None else steps_for_tolerance(start, seg.ctrl, seg.end, tolerance)
        for i in range(1, n + 1):
            points.append(evaluate_quadratic(start, seg.ctrl, seg.end, i / n))
        # Land exactly on the endpoint regardless of float drift.
        points[-1] = list(seg.end)

    if outline.closed and points[-1] != points[0]:
        points.append(list(points[0]))

    return points


def _fmt(value, precision):
    text = f"{value:.{precision}f}"
    if text.startswith("-") and float(text) == 0:
        text = text[1:]
    return text


def outline_to_svg_path(outline, precision=3):
    """Convert an outline to an SVG path d attribute, keeping its curves."""
    def pt(p):
        return f"{_fmt(p[0], precision)} {_fmt(p[1], precision)}"

    parts = [f"M {pt(outline.start)}"]

    for seg in outline.segments:
        if seg.kind == "line":
            parts.append(f"L {pt(seg.end)}")
        else:
            parts.append(f"Q {pt(seg.ctrl)} {pt(seg.end)}")

    if outline.closed:
        parts.append("Z")

    return " ".join(parts)
