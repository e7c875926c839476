"""
Workspace directory layout.

The core never reads the process environment; callers build a
WorkspacePaths from an explicit base directory and pass it in.
"""

import os
from dataclasses import dataclass

USER_BASE_SUFFIX = os.path.join(".local", "lib", "xhGen")
CSV_DIR_NAME = "csv-library"
OUTPUT_DIR_NAME = "xhGenerated"
PROFILE_DIR_NAME = "profiles"
DEFAULT_CSV_FILENAME = "unique_crosshair_color_pairs.csv"
PREVIEW_FILENAME = "reticle-preview.svg"


@dataclass(frozen=True)
class WorkspacePaths:
    """Directories used for color files, generated artifacts and profiles."""
    base_dir: str

    @classmethod
    def for_home(cls, home):
        return cls(os.path.join(home, USER_BASE_SUFFIX))

    @property
    def csv_dir(self):
        return os.path.join(self.base_dir, CSV_DIR_NAME)

    @property
    def output_dir(self):
        return os.path.join(self.base_dir, OUTPUT_DIR_NAME)

    @property
    def profiles_dir(self):
        return os.path.join(self.base_dir, PROFILE_DIR_NAME)

    @property
    def default_csv_path(self):
        return os.path.join(self.csv_dir, DEFAULT_CSV_FILENAME)

    @property
    def preview_svg_path(self):
        return os.path.join(self.output_dir, PREVIEW_FILENAME)
