"""
Spoke outline construction.

A spoke runs from its base radius (just inside the ring) toward its tip
radius (the edge of the center gap). Two profiles exist:

- bevel: a trapezoid from base width to tip width, sides drawn as
  quadratic curves;
- razor: used when the tip width is effectively zero, narrowing through a
  shoulder, a mid section and a pinch before meeting at a point.

Outlines are returned as SpokeOutline models and shared by both renderers.
"""

import math

from reticlegen.geometry.derive import canvas_center, spoke_base_radius, spoke_tip_radius
from reticlegen.models import RAZOR_TIP_THRESHOLD, OutlineSegment, SpokeOutline
from reticlegen.tracer import get_tracer, trace

# (radial fraction of the base-to-tip distance, fraction of base half-width)
RAZOR_SHOULDER = (0.25, 0.9)
RAZOR_MID = (0.6, 0.6)
RAZOR_PINCH = (0.9, 0.18)


def _midpoint(a, b):
    return [(a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0]


def _line(end):
    return OutlineSegment(kind="line", end=list(end))


def _quad(start, end):
    """Quadratic segment whose control point sits midway along its chord."""
    return OutlineSegment(kind="quad", ctrl=_midpoint(start, end), end=list(end))


class _Frame:
    """Radial coordinate frame for one spoke angle."""

    def __init__(self, center, angle_deg):
        theta = math.radians(angle_deg)
        self.cx, self.cy = center
        self.ux = math.cos(theta)
        self.uy = math.sin(theta)
        # Perpendicular, pointing to the spoke's "right" side.
        self.px = -self.uy
        self.py = self.ux

    def axis(self, radius):
        return (self.cx + radius * self.ux, self.cy + radius * self.uy)

    def left(self, radius, half_width):
        x, y = self.axis(radius)
        return [x - self.px * half_width, y - self.py * half_width]

    def right(self, radius, half_width):
        x, y = self.axis(radius)
        return [x + self.px * half_width, y + self.py * half_width]


def build_spoke_outline(center, angle_deg, tip_radius, base_radius, base_width, tip_width):
    """
    Build the closed outline of one spoke.

    Args:
        center: (x, y) canvas center
        angle_deg: direction of the spoke in degrees (0 = +x, clockwise on screen)
        tip_radius: distance of the tip from the center
        base_radius: distance of the base from the center
        base_width: full width at the base
        tip_width: full width at the tip; <= 0.01 selects the razor profile

    Returns:
        SpokeOutline starting and ending at the base-left corner
    """
    frame = _Frame(center, angle_deg)
    base_half = base_width / 2.0

    bl = frame.left(base_radius, base_half)
    br = frame.right(base_radius, base_half)

    if tip_width <= RAZOR_TIP_THRESHOLD:
        return _razor_outline(frame, angle_deg, tip_radius, base_radius, base_half, bl, br)

    tip_half = tip_width / 2.0
    tl = frame.left(tip_radius, tip_half)
    tr = frame.right(tip_radius, tip_half)

    segments = [
        _line(br),
        _quad(br, tr),
        _line(tl),
        _quad(tl, bl),
    ]
    return SpokeOutline(angle=angle_deg, mode="bevel", start=bl, segments=segments)


def _razor_outline(frame, angle_deg, tip_radius, base_radius, base_half, bl, br):
    dist = abs(base_radius - tip_radius)

    def section(stage):
        radial, width = stage
        radius = base_radius - dist * radial
        half = base_half * width
        return frame.left(radius, half), frame.right(radius, half)

    sl, sr = section(RAZOR_SHOULDER)
    ml, mr = section(RAZOR_MID)
    pl, pr = section(RAZOR_PINCH)
    tip = list(frame.axis(tip_radius))

    segments = [
        _line(br),
        _line(sr),
        _quad(sr, mr),
        _quad(mr, pr),
        _quad(pr, tip),
        _quad(tip, pl),
        _quad(pl, ml),
        _quad(ml, sl),
        _line(bl),
    ]
    return SpokeOutline(angle=angle_deg, mode="razor", start=bl, segments=segments)


@trace(label="build_reticle_outlines")
def build_reticle_outlines(config):
    """Build one outline per configured angle, in draw order."""
    tracer = get_tracer()

    center = canvas_center(config)
    tip_r = spoke_tip_radius(config)
    base_r = spoke_base_radius(config)

    outlines = [
        build_spoke_outline(
            center, angle, tip_r, base_r,
            config.spoke_base_width, config.spoke_tip_width,
        )
        for angle in config.angles
    ]

    if base_r < tip_r:
        tracer.event("Spoke base lies inside tip radius; spokes are inverted", level="DEBUG",
                     base_radius=base_r, tip_radius=tip_r)
    tracer.event(f"Built {len(outlines)} spoke outlines", mode="razor" if config.uses_razor_taper else "bevel")

    return outlines
