"""
Animation Configuration Settings

All configuration constants for the animation playback engine.
Modify these values (or the JSON overrides) to change playback defaults.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# ============================================================================
# Project Paths
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
ANIMATION_CONFIG_DIR = ASSETS_DIR / "config" / "animation"
ANIMATION_DEFAULTS_PATH = ANIMATION_CONFIG_DIR / "animation_defaults.json"

# ============================================================================
# Playback Defaults
# ============================================================================

# Wrap mode given to newly registered states ("once", "loop", "ping_pong", "default")
DEFAULT_WRAP_MODE = "once"
DEFAULT_PLAYBACK_SPEED = 1.0  # Signed multiplier applied to every frame delta
PLAY_AUTOMATICALLY = True     # Play the default clip when the component becomes ready

# Blending (accepted by blend/cross_fade, not applied to any interpolation)
DEFAULT_BLEND_WEIGHT = 1.0
DEFAULT_BLEND_LENGTH = 1.0
DEFAULT_CROSSFADE_LENGTH = 0.3  # Seconds

# ============================================================================
# Asset Loading
# ============================================================================

UNNAMED_CLIP_PREFIX = "Animation_"  # Unnamed glTF animations become Animation_<index>
UNNAMED_JOINT_PREFIX = "Joint_"     # Unnamed glTF nodes become Joint_<index>
FIRST_CLIP_ID = 1                   # First id handed out by ClipLibrary

# ============================================================================
# Playback Defaults - Overridden from JSON Config
# ============================================================================

def _load_animation_defaults() -> dict:
    """
    Load playback default overrides from the JSON configuration file.

    Returns:
        Dictionary of override values (empty if the file is absent)
    """
    if not ANIMATION_DEFAULTS_PATH.exists():
        return {}

    try:
        with open(ANIMATION_DEFAULTS_PATH, 'r') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading animation defaults from %s: %s", ANIMATION_DEFAULTS_PATH, e)
        return {}

    overrides = {}
    if "wrap_mode" in config:
        overrides["wrap_mode"] = str(config["wrap_mode"])
    if "speed" in config:
        overrides["speed"] = float(config["speed"])
    if "play_automatically" in config:
        overrides["play_automatically"] = bool(config["play_automatically"])
    if "crossfade_length" in config:
        overrides["crossfade_length"] = float(config["crossfade_length"])
    return overrides


_ANIMATION_DEFAULTS = _load_animation_defaults()
DEFAULT_WRAP_MODE = _ANIMATION_DEFAULTS.get("wrap_mode", DEFAULT_WRAP_MODE)
DEFAULT_PLAYBACK_SPEED = _ANIMATION_DEFAULTS.get("speed", DEFAULT_PLAYBACK_SPEED)
PLAY_AUTOMATICALLY = _ANIMATION_DEFAULTS.get("play_automatically", PLAY_AUTOMATICALLY)
DEFAULT_CROSSFADE_LENGTH = _ANIMATION_DEFAULTS.get("crossfade_length", DEFAULT_CROSSFADE_LENGTH)
