"""
Top-level render entry points for the reticle generator.

Thin orchestration over the renderers: pick the config, render, persist.
"""

import os

from reticlegen.batch import generate_batch_from_csv
from reticlegen.config import load_config
from reticlegen.io.save_artifacts import save_svg
from reticlegen.profiles import ProfileStore
from reticlegen.render.raster import rasterize_reticle, save_raster_pngs
from reticlegen.render.svg_render import emit_reticle_svg
from reticlegen.tracer import get_tracer, trace
from reticlegen.workspace import WorkspacePaths


def resolve_workspace(app_config, home=None):
    """Workspace from the config, or the per-user default under home."""
    if app_config.workspace.base_dir:
        return WorkspacePaths(app_config.workspace.base_dir)
    return WorkspacePaths.for_home(home or os.path.expanduser("~"))


def resolve_reticle_config(app_config, profile=None, workspace=None):
    """ReticleConfig from a named profile when given, else from app config."""
    if profile:
        workspace = workspace or resolve_workspace(app_config)
        return ProfileStore(workspace.profiles_dir).load(profile)
    return app_config.reticle_config()


@trace(label="render_svg_file")
def render_svg_file(config, path):
    """Render config to an SVG file, creating parent directories."""
    save_svg(emit_reticle_svg(config), path)
    return path


@trace(label="render_png_files")
def render_png_files(config, path_stem, raster=None):
    """Rasterize config and write the colored and black PNG variants."""
    result = rasterize_reticle(config, raster)
    return save_raster_pngs(result, path_stem)


@trace(label="run_batch", arg_names=["csv_path", "out_dir", "profile"])
def run_batch(app_config=None, csv_path=None, out_dir=None, config_path=None, profile=None):
    """
    Run a color-pair batch using application settings.

    Missing paths fall back to the workspace defaults.

    Returns:
        number of artifacts written
    """
    tracer = get_tracer()

    if app_config is None:
        app_config = load_config(config_path)

    workspace = resolve_workspace(app_config)
    template = resolve_reticle_config(app_config, profile, workspace)

    csv_path = csv_path or workspace.default_csv_path
    out_dir = out_dir or workspace.output_dir

    tracer.event("Batch starting", csv_path=str(csv_path), out_dir=str(out_dir))

    return generate_batch_from_csv(
        template, csv_path, out_dir,
        output_format=app_config.batch.output_format,
        raster=app_config.raster,
        verbose=app_config.batch.verbose,
    )
