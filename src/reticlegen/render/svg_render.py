"""
SVG emission for the reticle generator.

Builds a resolution-independent document: a group of filled spoke paths
followed by the stroked ring circle.
"""

import svgwrite

from reticlegen.geometry.curves import outline_to_svg_path
from reticlegen.geometry.derive import canvas_center, ring_draw_radius
from reticlegen.geometry.spoke_outline import build_reticle_outlines
from reticlegen.tracer import get_tracer, trace


def rgba_string(color):
    """Serialize an (r, g, b, a) tuple as rgba(r,g,b,a) with a in [0, 1]."""
    r, g, b, a = color
    return f"rgba({r},{g},{b},{a:g})"


@trace(label="emit_reticle_svg")
def emit_reticle_svg(config, precision=3):
    """
    Create an SVG document for a reticle.

    Args:
        config: ReticleConfig
        precision: decimal places written for path coordinates

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()

    size = config.size
    cx, cy = canvas_center(config)

    # Validation is off: svgwrite's color checker does not know rgba().
    dwg = svgwrite.Drawing(size=(size, size), debug=False)
    dwg["viewBox"] = f"0 0 {size} {size}"

    arm_fill = rgba_string(config.arm_color)
    arms = dwg.g(id="arms")

    for outline in build_reticle_outlines(config):
        arms.add(dwg.path(d=outline_to_svg_path(outline, precision), fill=arm_fill))

    dwg.add(arms)

    ring = dwg.circle(
        center=(cx, cy),
        r=ring_draw_radius(config),
        id="ring",
        fill="none",
        stroke=rgba_string(config.rim_color),
        stroke_width=config.ring_thickness,
    )
    dwg.add(ring)

    tracer.event(f"SVG emitted with {len(config.angles)} spokes", size=size)

    return dwg


def reticle_svg_string(config, precision=3):
    """Serialize the reticle SVG to a string."""
    return emit_reticle_svg(config, precision).tostring()
