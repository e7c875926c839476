"""
Pydantic data models for the reticle generator.

A ReticleConfig is an immutable value: every render takes one and returns an
artifact without touching it. Clones are made with with_updates(), which
re-runs validation so clamping applies to the new values too.
"""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


MIN_CANVAS_SIZE = 64
MAX_CANVAS_SIZE = 8192
MAX_RING_OUTER_RADIUS = 4192.0

# Tip widths at or below this select the razor taper.
RAZOR_TIP_THRESHOLD = 0.01


def clamp_alpha(alpha):
    """Clamp an opacity value into [0, 1]."""
    return min(max(float(alpha), 0.0), 1.0)


class ReticleConfig(BaseModel):
    """Every parameter needed to draw one reticle."""
    size: int = 256
    ring_outer_radius: float = 118.0
    ring_thickness: float = 20.0
    rim_color: Tuple[int, int, int, float] = (255, 255, 255, 1.0)
    arm_color: Tuple[int, int, int, float] = (0, 0, 0, 1.0)
    gap_from_ring: float = 10.0
    center_gap_radius: float = 2.0
    spoke_base_width: float = 12.0
    spoke_tip_width: float = 1.5
    angles: List[float] = Field(default_factory=lambda: [45.0, 135.0, 225.0, 315.0])
    # Persisted with profiles but not used by either renderer.
    blur_radius: float = 1.0
    glow_radius: float = 2.0

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("size")
    @classmethod
    def _clamp_size(cls, value):
        return min(max(value, MIN_CANVAS_SIZE), MAX_CANVAS_SIZE)

    @field_validator("ring_outer_radius")
    @classmethod
    def _clamp_ring_radius(cls, value):
        return min(max(value, 0.0), MAX_RING_OUTER_RADIUS)

    @field_validator(
        "ring_thickness", "gap_from_ring", "center_gap_radius",
        "spoke_base_width", "spoke_tip_width", "blur_radius", "glow_radius",
    )
    @classmethod
    def _clamp_non_negative(cls, value):
        return max(value, 0.0)

    @field_validator("rim_color", "arm_color")
    @classmethod
    def _check_color(cls, value):
        r, g, b, a = value
        for channel in (r, g, b):
            if not 0 <= channel <= 255:
                raise ValueError(f"color channel out of range 0-255: {channel}")
        return (r, g, b, clamp_alpha(a))

    @property
    def uses_razor_taper(self):
        return self.spoke_tip_width <= RAZOR_TIP_THRESHOLD


def with_updates(config, **changes):
    """Return a validated clone of config with the given fields replaced."""
    data = config.model_dump()
    data.update(changes)
    return type(config).model_validate(data)


class ColorSpec(BaseModel):
    """A parsed color token: RGB triple plus canonical uppercase hex."""
    rgb: Tuple[int, int, int]
    hex: str = Field(..., pattern=r"^[0-9A-F]{6}$")

    model_config = ConfigDict(extra="forbid", frozen=True)

    def as_rgba(self, alpha=1.0):
        return (self.rgb[0], self.rgb[1], self.rgb[2], clamp_alpha(alpha))


class OutlineSegment(BaseModel):
    """One edge of a spoke outline, starting where the previous one ended."""
    kind: Literal["line", "quad"]
    end: List[float] = Field(..., min_length=2, max_length=2)
    ctrl: Optional[List[float]] = Field(default=None, min_length=2, max_length=2)

    model_config = ConfigDict(extra="forbid")


class SpokeOutline(BaseModel):
    """
    Closed outline of a single spoke in canvas coordinates.

    Both renderers consume this: the SVG backend writes the curves as-is,
    the raster backend flattens them into a polygon.
    """
    angle: float
    mode: Literal["bevel", "razor"]
    start: List[float] = Field(..., min_length=2, max_length=2)
    segments: List[OutlineSegment] = Field(default_factory=list)
    closed: bool = True

    model_config = ConfigDict(extra="forbid")

    @property
    def curve_count(self):
        return sum(1 for seg in self.segments if seg.kind == "quad")
