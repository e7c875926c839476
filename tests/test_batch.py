"""Tests for color-pair batch generation."""

import os
import xml.etree.ElementTree as ET

import cv2
import pytest

from reticlegen.batch import (
    apply_color_pair, artifact_filename, generate_batch, generate_batch_from_csv,
)
from reticlegen.colors import parse_color_spec
from reticlegen.config import RasterConfig
from reticlegen.errors import InvalidHexColor, IOFailure, MalformedRow
from reticlegen.models import ReticleConfig

SVG_NS = "{http://www.w3.org/2000/svg}"


class TestNaming:
    def test_artifact_filename(self):
        rim = parse_color_spec("ff0000")
        arm = parse_color_spec("#00ff00")

        assert artifact_filename(256, rim, arm) == "xhMan_256px-rim-FF0000_arms-00FF00.svg"
        assert artifact_filename(512, rim, arm, "png") == "xhMan_512px-rim-FF0000_arms-00FF00.png"


class TestApplyColorPair:
    def test_alpha_forced_opaque(self):
        template = ReticleConfig(rim_color=(1, 1, 1, 0.2), arm_color=(2, 2, 2, 0.3))

        cfg = apply_color_pair(template, parse_color_spec("102030"), parse_color_spec("405060"))

        assert cfg.rim_color == (16, 32, 48, 1.0)
        assert cfg.arm_color == (64, 80, 96, 1.0)

    def test_template_untouched(self, default_config):
        apply_color_pair(default_config, parse_color_spec("102030"), parse_color_spec("405060"))

        assert default_config.rim_color == (255, 255, 255, 1.0)


class TestGenerateBatch:
    """Tests for batch runs."""

    def test_two_rows(self, temp_dir, sample_csv, default_config):
        out_dir = os.path.join(temp_dir, "out")

        count = generate_batch_from_csv(default_config, sample_csv, out_dir)

        assert count == 2
        assert sorted(os.listdir(out_dir)) == [
            "xhMan_256px-rim-0000FF_arms-FFFFFF.svg",
            "xhMan_256px-rim-FF0000_arms-00FF00.svg",
        ]

    def test_size_from_template(self, temp_dir, sample_csv):
        out_dir = os.path.join(temp_dir, "out")

        generate_batch_from_csv(ReticleConfig(size=128), sample_csv, out_dir)

        assert all(name.startswith("xhMan_128px-") for name in os.listdir(out_dir))

    def test_colors_written_opaque(self, temp_dir, sample_csv):
        out_dir = os.path.join(temp_dir, "out")
        template = ReticleConfig(arm_color=(0, 0, 0, 0.5))

        generate_batch_from_csv(template, sample_csv, out_dir)

        path = os.path.join(out_dir, "xhMan_256px-rim-FF0000_arms-00FF00.svg")
        root = ET.parse(path).getroot()
        assert root.find(f"{SVG_NS}circle").get("stroke") == "rgba(255,0,0,1)"
        for spoke in root.findall(f"{SVG_NS}g/{SVG_NS}path"):
            assert spoke.get("fill") == "rgba(0,255,0,1)"

    def test_duplicate_pairs_overwrite(self, temp_dir, write_csv, default_config):
        csv_path = write_csv("rim,arm\nFF0000,00FF00\n#ff0000,#00ff00\n")
        out_dir = os.path.join(temp_dir, "out")

        count = generate_batch_from_csv(default_config, csv_path, out_dir)

        assert count == 2
        assert os.listdir(out_dir) == ["xhMan_256px-rim-FF0000_arms-00FF00.svg"]

    def test_invalid_hex_aborts_without_output(self, temp_dir, write_csv, default_config):
        """A bad row anywhere means nothing is written, even for earlier valid rows."""
        csv_path = write_csv("rim,arm\nFF0000,00FF00\nZZZZZZ,00FF00\n0000FF,FFFFFF\n")
        out_dir = os.path.join(temp_dir, "out")

        with pytest.raises(InvalidHexColor):
            generate_batch_from_csv(default_config, csv_path, out_dir)

        assert not os.path.exists(out_dir) or os.listdir(out_dir) == []

    def test_malformed_row_aborts(self, temp_dir, write_csv, default_config):
        csv_path = write_csv("rim,arm\nFF0000;00FF00\n")

        with pytest.raises(MalformedRow):
            generate_batch_from_csv(default_config, csv_path, os.path.join(temp_dir, "out"))

    def test_missing_csv(self, temp_dir, default_config):
        with pytest.raises(IOFailure):
            generate_batch_from_csv(
                default_config, os.path.join(temp_dir, "nope.csv"), os.path.join(temp_dir, "out"),
            )

    def test_unwritable_output_reports_path(self, temp_dir, default_config):
        """Output directory path occupied by a file fails with the path attached."""
        blocker = os.path.join(temp_dir, "blocker")
        with open(blocker, "w", encoding="utf-8") as f:
            f.write("x")

        pairs = [(parse_color_spec("FF0000"), parse_color_spec("00FF00"))]
        with pytest.raises(IOFailure) as excinfo:
            generate_batch(default_config, pairs, blocker)

        assert "blocker" in excinfo.value.path

    def test_png_output(self, temp_dir, sample_csv):
        out_dir = os.path.join(temp_dir, "png")
        template = ReticleConfig(size=64, ring_outer_radius=30, ring_thickness=4)

        count = generate_batch_from_csv(
            template, sample_csv, out_dir,
            output_format="png", raster=RasterConfig(supersample=2),
        )

        assert count == 2
        path = os.path.join(out_dir, "xhMan_64px-rim-FF0000_arms-00FF00.png")
        img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
        assert img.shape == (64, 64, 4)
        # ring pixel is rim red, stored as BGRA
        assert img[32, 32 + 28].tolist() == [0, 0, 255, 255]

    def test_unknown_format(self, temp_dir, default_config):
        with pytest.raises(ValueError):
            generate_batch(default_config, [], temp_dir, output_format="gif")

    def test_empty_pairs(self, temp_dir, default_config):
        out_dir = os.path.join(temp_dir, "empty")

        assert generate_batch(default_config, [], out_dir) == 0
        assert os.path.isdir(out_dir)

    def test_verbose_progress(self, temp_dir, sample_csv, default_config, capsys):
        generate_batch_from_csv(default_config, sample_csv, os.path.join(temp_dir, "out"), verbose=True)

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("  1/2 -> ")
