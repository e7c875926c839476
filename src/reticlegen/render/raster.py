"""
Supersampled raster rendering for the reticle generator.

The ring and the spokes are drawn into one binary mask at S times the output
resolution, averaged down in SxS blocks into an 8-bit coverage mask, and
colorized twice: once with the ring color and once with black, so light and
dark variants come from a single shape computation.
"""

from dataclasses import dataclass

import cv2
import numpy as np

from reticlegen.colors import parse_color_spec
from reticlegen.config import RasterConfig
from reticlegen.geometry.curves import flatten_outline
from reticlegen.geometry.derive import canvas_center, ring_inner_radius
from reticlegen.geometry.spoke_outline import build_reticle_outlines
from reticlegen.io.save_artifacts import save_rgba_image
from reticlegen.tracer import get_tracer, trace

FULL_COVERAGE = 255

# Rows of the supersampled mask evaluated per ring band.
RING_BAND_ROWS = 256

# Fractional bits handed to cv2.fillPoly for sub-pixel vertices.
FILL_SHIFT = 4


@dataclass
class RasterResult:
    """Coverage mask plus the two colorized RGBA buffers."""
    coverage: np.ndarray
    colored: np.ndarray
    black: np.ndarray


def fill_ring(mask, center, inner_radius, outer_radius):
    """
    Mark every mask pixel whose center lies within the annulus.

    Coordinates are in mask pixels. Rows are processed in bands so the
    distance grid never spans the whole mask.
    """
    height, width = mask.shape
    cx, cy = center
    inner_sq = inner_radius * inner_radius
    outer_sq = outer_radius * outer_radius

    dx_sq = ((np.arange(width, dtype=np.float64) + 0.5) - cx) ** 2

    for top in range(0, height, RING_BAND_ROWS):
        bottom = min(top + RING_BAND_ROWS, height)
        dy_sq = ((np.arange(top, bottom, dtype=np.float64) + 0.5) - cy) ** 2
        dist_sq = dy_sq[:, None] + dx_sq[None, :]
        band = (dist_sq >= inner_sq) & (dist_sq <= outer_sq)
        mask[top:bottom][band] = FULL_COVERAGE


def fill_outline(mask, outline, scale, tolerance):
    """
    Flatten a spoke outline and fill it into the mask.

    tolerance is in output pixels; vertices are scaled into mask space and
    shifted so integer mask indices sit at pixel centers.
    """
    points = np.asarray(flatten_outline(outline, tolerance=tolerance), dtype=np.float64)
    fixed = np.round((points * scale - 0.5) * (1 << FILL_SHIFT)).astype(np.int32)
    cv2.fillPoly(mask, [fixed.reshape(-1, 1, 2)], FULL_COVERAGE, lineType=cv2.LINE_8, shift=FILL_SHIFT)
    return len(points)


def downsample_coverage(mask, scale, alpha=255):
    """
    Average SxS blocks into one coverage value per output pixel.

    Block averages round half up; the global alpha is then applied with
    255-denominator rounding.
    """
    height, width = mask.shape
    out_h, out_w = height // scale, width // scale
    area = scale * scale

    blocks = mask[:out_h * scale, :out_w * scale].reshape(out_h, scale, out_w, scale)
    sums = blocks.sum(axis=(1, 3), dtype=np.uint32)
    avg = (sums + area // 2) // area

    alpha = min(max(int(alpha), 0), 255)
    return ((avg * alpha + 127) // 255).astype(np.uint8)


def colorize(coverage, rgb):
    """Build a straight-alpha RGBA buffer with a fixed color."""
    out = np.empty(coverage.shape + (4,), dtype=np.uint8)
    out[..., 0] = rgb[0]
    out[..., 1] = rgb[1]
    out[..., 2] = rgb[2]
    out[..., 3] = coverage
    return out


@trace(label="rasterize_reticle")
def rasterize_reticle(config, settings=None):
    """
    Rasterize a reticle into coverage and RGBA buffers.

    Args:
        config: ReticleConfig
        settings: RasterConfig (defaults used when None)

    Returns:
        RasterResult with size x size buffers
    """
    tracer = get_tracer()
    settings = settings or RasterConfig()

    scale = int(settings.supersample)
    if scale < 1:
        raise ValueError(f"supersample must be >= 1, got {settings.supersample}")

    if settings.color:
        rgb = parse_color_spec(settings.color).rgb
    else:
        rgb = tuple(config.rim_color[:3])

    size = config.size
    mask = np.zeros((size * scale, size * scale), dtype=np.uint8)
    cx, cy = canvas_center(config)
    center = (cx * scale, cy * scale)

    with tracer.span("ring_coverage", module="raster"):
        fill_ring(
            mask, center,
            ring_inner_radius(config) * scale,
            config.ring_outer_radius * scale,
        )

    with tracer.span("spoke_coverage", module="raster"):
        vertex_count = 0
        for outline in build_reticle_outlines(config):
            vertex_count += fill_outline(mask, outline, scale, settings.flatten_tolerance)
        tracer.event(f"Filled {len(config.angles)} spokes", vertices=vertex_count)

    with tracer.span("downsample", module="raster"):
        coverage = downsample_coverage(mask, scale, settings.alpha)

    result = RasterResult(
        coverage=coverage,
        colored=colorize(coverage, rgb),
        black=colorize(coverage, (0, 0, 0)),
    )

    tracer.event("Raster complete", coverage=coverage)

    return result


def save_raster_pngs(result, path_stem):
    """
    Write both colorized buffers as PNG.

    Returns (colored_path, black_path): <stem>.png and <stem>-black.png.
    """
    colored_path = f"{path_stem}.png"
    black_path = f"{path_stem}-black.png"
    save_rgba_image(result.colored, colored_path)
    save_rgba_image(result.black, black_path)
    return colored_path, black_path
