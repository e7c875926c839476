"""
Artifact reading and writing for the reticle generator.

Every filesystem failure is re-raised as IOFailure carrying the path that
was being touched.
"""

import json
import os

import cv2
import numpy as np

from reticlegen.errors import IOFailure
from reticlegen.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if not path:
        return
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise IOFailure("Create directory", path, e) from e


def read_text(path):
    """Read a UTF-8 text file; undecodable bytes count as a read failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure("Read", path, e) from e


def save_svg(svg_content, path):
    """
    Save an SVG document to file.

    Accepts an svgwrite Drawing or an already serialized string.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise IOFailure("Write", path, e) from e

    tracer.event(f"Saved SVG: {path}")


def save_json(data, path, indent=2):
    """
    Save a dictionary or Pydantic model to JSON.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent)
    except OSError as e:
        raise IOFailure("Write", path, e) from e

    tracer.event(f"Saved JSON: {path}")


def save_rgba_image(img, path):
    """
    Save an RGBA pixel buffer as PNG.

    OpenCV expects BGRA channel order, so channels are swapped on the way out.
    """
    tracer = get_tracer()

    if img.ndim != 3 or img.shape[2] != 4:
        raise ValueError(f"Expected an HxWx4 RGBA buffer, got shape {img.shape}")

    ensure_dir(os.path.dirname(path))

    img_bgra = cv2.cvtColor(np.ascontiguousarray(img, dtype=np.uint8), cv2.COLOR_RGBA2BGRA)
    if not cv2.imwrite(path, img_bgra):
        raise IOFailure("Write", path, "encoder returned no data")

    tracer.event(f"Saved image: {path}")
