"""
Hex color parsing for batch color pairs.

Color-pair files are line oriented: the first line is a header and is
always skipped, blank lines are ignored, and every other line holds
"rim_hex,arm_hex". Tokens may carry a leading '#' and are case-insensitive;
they are normalized to six uppercase digits.
"""

import string

from reticlegen.errors import InvalidHexColor, MalformedRow
from reticlegen.io.save_artifacts import read_text
from reticlegen.models import ColorSpec
from reticlegen.tracer import get_tracer, trace

_HEX_DIGITS = set(string.hexdigits)


def normalize_hex(raw, line_number=None):
    """Strip whitespace and leading "#"s, validate six hex digits, return uppercase."""
    token = raw.strip().lstrip("#")

    if len(token) != 6 or not all(c in _HEX_DIGITS for c in token):
        raise InvalidHexColor(raw, line_number)

    return token.upper()


def hex_to_rgb(hex_str):
    """Convert a normalized six-digit hex string to an (r, g, b) tuple."""
    return tuple(int(hex_str[i:i + 2], 16) for i in (0, 2, 4))


def parse_color_spec(raw, line_number=None):
    """Parse a color token into a ColorSpec."""
    hex_str = normalize_hex(raw, line_number)
    return ColorSpec(rgb=hex_to_rgb(hex_str), hex=hex_str)


def parse_color_pairs(text):
    """
    Parse color-pair text into a list of (rim, arm) ColorSpec tuples.

    Raises on the first bad row; line numbers in errors are 1-based.
    """
    pairs = []

    # Rows end at \n or \r\n only.
    for idx, line in enumerate(text.split("\n")):
        line = line.rstrip("\r")
        if idx == 0:
            continue
        if not line.strip():
            continue

        line_number = idx + 1
        if "," not in line:
            raise MalformedRow(line_number, line)

        outer, inner = line.split(",", 1)
        pairs.append((
            parse_color_spec(outer, line_number),
            parse_color_spec(inner, line_number),
        ))

    return pairs


@trace(label="load_color_pairs")
def load_color_pairs(path):
    """Read and parse a color-pair CSV file."""
    tracer = get_tracer()

    pairs = parse_color_pairs(read_text(path))

    tracer.event(f"Loaded {len(pairs)} color pairs", path=str(path))

    return pairs
