"""
Batch generation of reticles over color pairs.

Each (rim, arm) pair produces one artifact rendered from a clone of the
template config with both colors forced to full opacity. The run is
fail-fast: the color file is parsed completely before anything is written,
and the first write failure aborts the remaining pairs.
"""

import os

from reticlegen.colors import load_color_pairs
from reticlegen.io.save_artifacts import ensure_dir, save_rgba_image, save_svg
from reticlegen.models import with_updates
from reticlegen.render.raster import rasterize_reticle
from reticlegen.render.svg_render import emit_reticle_svg
from reticlegen.tracer import get_tracer, trace

ARTIFACT_PREFIX = "xhMan"
OUTPUT_FORMATS = ("svg", "png")


def artifact_filename(size, rim, arm, extension="svg"):
    """Deterministic file name for one color pair."""
    return f"{ARTIFACT_PREFIX}_{size}px-rim-{rim.hex}_arms-{arm.hex}.{extension}"


def apply_color_pair(template, rim, arm):
    """Clone template with the pair's colors at alpha 1.0."""
    return with_updates(template, rim_color=rim.as_rgba(1.0), arm_color=arm.as_rgba(1.0))


@trace(label="generate_batch", arg_names=["output_format", "verbose"])
def generate_batch(template, pairs, out_dir, output_format="svg", raster=None, verbose=False):
    """
    Render one artifact per color pair into out_dir.

    Args:
        template: ReticleConfig used for everything except colors
        pairs: sequence of (rim ColorSpec, arm ColorSpec)
        out_dir: destination directory, created if absent
        output_format: "svg" for vector output, "png" for the raster backend
        raster: RasterConfig for png output
        verbose: print one progress line per artifact

    Returns:
        number of artifacts written
    """
    tracer = get_tracer()

    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {output_format}")

    ensure_dir(out_dir)

    total = len(pairs)
    for idx, (rim, arm) in enumerate(pairs):
        cfg = apply_color_pair(template, rim, arm)
        path = os.path.join(out_dir, artifact_filename(cfg.size, rim, arm, output_format))

        if output_format == "svg":
            save_svg(emit_reticle_svg(cfg), path)
        else:
            save_rgba_image(rasterize_reticle(cfg, raster).colored, path)

        if verbose:
            print(f"{idx + 1:>3}/{total} -> {path}")

    tracer.event(f"Batch wrote {total} artifacts", out_dir=str(out_dir))

    return total


def generate_batch_from_csv(template, csv_path, out_dir, output_format="svg", raster=None, verbose=False):
    """Parse a color-pair CSV, then run generate_batch over every row."""
    pairs = load_color_pairs(csv_path)
    return generate_batch(
        template, pairs, out_dir,
        output_format=output_format,
        raster=raster,
        verbose=verbose,
    )
