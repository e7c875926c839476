"""
Derived radii for a reticle configuration.

Everything here is a pure function of the config and is recomputed on every
render. Results are clamped to be non-negative; nothing is ever rejected.
"""

from typing import NamedTuple

from reticlegen.models import (
    MAX_CANVAS_SIZE, MAX_RING_OUTER_RADIUS, MIN_CANVAS_SIZE, with_updates,
)


class DerivedRadii(NamedTuple):
    ring_draw: float
    ring_inner: float
    spoke_base: float
    spoke_tip: float


def ring_draw_radius(config):
    """Radius of the ring's stroke centerline."""
    return max(0.0, config.ring_outer_radius - config.ring_thickness / 2.0)


def ring_inner_radius(config):
    return max(0.0, config.ring_outer_radius - config.ring_thickness)


def spoke_base_radius(config):
    """Where spokes start: just inside the ring, less the configured gap."""
    return max(0.0, ring_inner_radius(config) - config.gap_from_ring)


def spoke_tip_radius(config):
    return max(0.0, config.center_gap_radius)


def derive_radii(config):
    """Compute all dependent radii at once."""
    return DerivedRadii(
        ring_draw=ring_draw_radius(config),
        ring_inner=ring_inner_radius(config),
        spoke_base=spoke_base_radius(config),
        spoke_tip=spoke_tip_radius(config),
    )


def canvas_center(config):
    half = config.size / 2.0
    return (half, half)


def canvas_border_radius(size):
    return size / 2.0


def chain_radius_to_size(config):
    """Clone config with the ring's outer edge moved to the canvas border."""
    radius = min(max(canvas_border_radius(config.size), 0.0), MAX_RING_OUTER_RADIUS)
    return with_updates(config, ring_outer_radius=radius)


def chain_size_to_radius(config):
    """Clone config with the canvas resized to fit the ring exactly."""
    size = int(round(config.ring_outer_radius * 2.0))
    return with_updates(config, size=min(max(size, MIN_CANVAS_SIZE), MAX_CANVAS_SIZE))
