"""Tests for animation settings"""

import json

from animlib.config import settings


def test_load_animation_defaults_overlay(tmp_path, monkeypatch):
    """JSON overrides are read and typed"""
    path = tmp_path / "animation_defaults.json"
    path.write_text(json.dumps({
        "wrap_mode": "loop",
        "speed": "0.5",
        "play_automatically": False,
        "crossfade_length": 1,
        "unused": True,
    }))
    monkeypatch.setattr(settings, "ANIMATION_DEFAULTS_PATH", path)

    overrides = settings._load_animation_defaults()

    assert overrides == {
        "wrap_mode": "loop",
        "speed": 0.5,
        "play_automatically": False,
        "crossfade_length": 1.0,
    }


def test_load_animation_defaults_missing_file(tmp_path, monkeypatch):
    """No config file means no overrides"""
    monkeypatch.setattr(settings, "ANIMATION_DEFAULTS_PATH", tmp_path / "missing.json")
    assert settings._load_animation_defaults() == {}


def test_load_animation_defaults_invalid_json(tmp_path, monkeypatch):
    """Malformed config is ignored"""
    path = tmp_path / "animation_defaults.json"
    path.write_text("{not json")
    monkeypatch.setattr(settings, "ANIMATION_DEFAULTS_PATH", path)
    assert settings._load_animation_defaults() == {}


def test_shipped_defaults_are_applied():
    """Module constants reflect the shipped JSON file"""
    with open(settings.ANIMATION_DEFAULTS_PATH) as f:
        shipped = json.load(f)

    assert settings.DEFAULT_PLAYBACK_SPEED == float(shipped["speed"])
    assert settings.DEFAULT_WRAP_MODE == shipped["wrap_mode"]
    assert settings.PLAY_AUTOMATICALLY == shipped["play_automatically"]
