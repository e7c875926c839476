"""
Named configuration profiles stored as JSON files.

A profile is a ReticleConfig dumped field by field, so every value,
including the unused blur and glow radii, survives a save/load cycle.
"""

import json
import os

from pydantic import ValidationError

from reticlegen.errors import IOFailure, ProfileFormatError
from reticlegen.io.save_artifacts import ensure_dir, read_text, save_json
from reticlegen.models import ReticleConfig
from reticlegen.tracer import get_tracer

PROFILE_EXTENSION = ".json"


def sanitize_profile_name(raw):
    """
    Turn user input into a safe file stem.

    Returns None for blank input. Anything other than ASCII letters,
    digits, '-' and '_' becomes '_'.
    """
    trimmed = raw.strip()
    if not trimmed:
        return None
    return "".join(c if (c.isascii() and c.isalnum()) or c in "-_" else "_" for c in trimmed)


class ProfileStore:
    """Save, load, list and delete profiles in a single directory."""

    def __init__(self, profiles_dir):
        self.profiles_dir = profiles_dir

    def path_for(self, name):
        safe = sanitize_profile_name(name)
        if safe is None:
            raise ValueError("Enter a profile name.")
        ensure_dir(self.profiles_dir)
        return os.path.join(self.profiles_dir, safe + PROFILE_EXTENSION)

    def save(self, config, name):
        """Write config under name; returns the file path."""
        path = self.path_for(name)
        save_json(config, path)
        return path

    def load(self, name):
        """Read the named profile back into a ReticleConfig."""
        path = self.path_for(name)
        text = read_text(path)
        try:
            config = ReticleConfig.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ProfileFormatError(path, e) from e

        get_tracer().event(f"Loaded profile '{name}'", path=path)
        return config

    def list(self):
        """Sorted profile names present on disk."""
        ensure_dir(self.profiles_dir)
        try:
            entries = os.listdir(self.profiles_dir)
        except OSError as e:
            raise IOFailure("Read directory", self.profiles_dir, e) from e

        names = set()
        for entry in entries:
            if os.path.isfile(os.path.join(self.profiles_dir, entry)):
                names.add(os.path.splitext(entry)[0])
        return sorted(names)

    def delete(self, name):
        path = self.path_for(name)
        try:
            os.remove(path)
        except OSError as e:
            raise IOFailure("Delete", path, e) from e
        return path
