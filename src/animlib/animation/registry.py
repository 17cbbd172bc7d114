"""
Animation Registry

Named clip/state registry and playback controller for one animated object.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..config.settings import (
    DEFAULT_BLEND_LENGTH,
    DEFAULT_BLEND_WEIGHT,
    DEFAULT_CROSSFADE_LENGTH,
    DEFAULT_PLAYBACK_SPEED,
    DEFAULT_WRAP_MODE,
    PLAY_AUTOMATICALLY,
    PROJECT_ROOT,
)
from .clip import AnimationClip
from .player import KeyframePlayer
from .state import AnimationState, QueueMode, WrapMode

logger = logging.getLogger(__name__)

PlayerFactory = Callable[[AnimationState], KeyframePlayer]


@dataclass
class AnimationDefinition:
    """Serialized configuration of an animation component."""

    clip: int = 0
    clips: List[int] = field(default_factory=list)
    play_automatically: bool = PLAY_AUTOMATICALLY
    wrap_mode: WrapMode = field(default_factory=lambda: WrapMode.from_string(DEFAULT_WRAP_MODE))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimationDefinition":
        """Create a definition from JSON data."""

        return cls(
            clip=int(data.get("clip", 0)),
            clips=[int(clip_id) for clip_id in data.get("clips", [])],
            play_automatically=bool(data.get("play_automatically", PLAY_AUTOMATICALLY)),
            wrap_mode=WrapMode.from_string(data.get("wrap_mode", DEFAULT_WRAP_MODE)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "clip": self.clip,
            "clips": list(self.clips),
            "play_automatically": self.play_automatically,
            "wrap_mode": self.wrap_mode.value,
        }


def load_animation_definition(path: Path | str) -> AnimationDefinition:
    """Load an animation definition from a JSON file."""

    definition_path = Path(path)
    if not definition_path.is_absolute():
        definition_path = PROJECT_ROOT / definition_path

    if not definition_path.exists():
        raise FileNotFoundError(f"Animation definition not found: {definition_path}")

    with definition_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    return AnimationDefinition.from_dict(payload)


def _default_player_factory(state: AnimationState) -> KeyframePlayer:
    return KeyframePlayer()


class AnimationRegistry:
    """
    Owns the animation states of one object and controls their playback.

    States live in an append-only list; a name -> index map gives O(1)
    lookup while iteration follows registration order. Several states
    may be enabled at the same time.
    """

    def __init__(
        self,
        definition: Optional[AnimationDefinition] = None,
        player_factory: Optional[PlayerFactory] = None
    ):
        """
        Initialize registry.

        Args:
            definition: Serialized component configuration
            player_factory: Builds the player that advances each new state
        """
        self.definition = definition or AnimationDefinition()
        self.play_automatically = self.definition.play_automatically
        self.wrap_mode = self.definition.wrap_mode
        self.player_factory = player_factory or _default_player_factory
        self.default_clip: Optional[str] = None

        self._states: List[AnimationState] = []
        self._state_indexes: Dict[str, int] = {}

    @classmethod
    def from_definition(
        cls,
        definition: AnimationDefinition,
        assets,
        player_factory: Optional[PlayerFactory] = None
    ) -> "AnimationRegistry":
        """Build a registry and load its clips from ``assets``."""
        registry = cls(definition, player_factory)
        registry.initialize(assets)
        return registry

    # ------------------------------------------------------------------
    # Host lifecycle
    # ------------------------------------------------------------------
    def initialize(self, assets):
        """
        Load and register the configured clips.

        Args:
            assets: Asset loader exposing ``load_clip(clip_id)``
        """
        for clip_id in self.definition.clips:
            data = assets.load_clip(clip_id)
            if data is None:
                logger.warning("Animation clip %s could not be loaded", clip_id)
                continue

            self.add_clip(data, data.name)
            if clip_id == self.definition.clip:
                self.default_clip = data.name

    def awake(self):
        """Ready hook: auto-play the default clip if configured."""
        if self.play_automatically and self.clip is not None:
            self.play(self.default_clip)

    # ------------------------------------------------------------------
    # Clip registration and lookup
    # ------------------------------------------------------------------
    @property
    def clip(self) -> Optional[AnimationClip]:
        """The default clip."""
        if self.default_clip is None:
            return None
        return self.get_clip(self.default_clip)

    @clip.setter
    def clip(self, value: AnimationClip):
        self.add_clip(value, value.name)
        self.default_clip = value.name

    def add_clip(
        self,
        clip: AnimationClip,
        name: str,
        first_frame: Optional[int] = None,
        last_frame: Optional[int] = None,
        add_loop_frame: bool = False
    ):
        """
        Register a clip under ``name``, replacing any state already there.

        Args:
            clip: Clip to register
            name: State name (empty names are ignored)
            first_frame: First keyframe of a sub-range view of ``clip``
            last_frame: Last keyframe of a sub-range view of ``clip``
            add_loop_frame: Accepted for compatibility; no loop frame is appended
        """
        if not name:
            return

        if first_frame is not None or last_frame is not None:
            clip = AnimationClip.sub_clip(
                clip,
                name,
                clip.first_frame if first_frame is None else first_frame,
                clip.last_frame if last_frame is None else last_frame,
            )
            if add_loop_frame:
                logger.debug("Loop frame requested for '%s' but not appended", name)

        state = AnimationState(
            clip, name=name, wrap_mode=self.wrap_mode, speed=DEFAULT_PLAYBACK_SPEED
        )
        state.player = self.player_factory(state)

        index = self._state_indexes.get(name)
        if index is not None:
            logger.debug("Replacing animation state '%s'", name)
            self._states[index] = state
        else:
            self._state_indexes[name] = len(self._states)
            self._states.append(state)

    def get_clip(self, name: str) -> Optional[AnimationClip]:
        """Clip registered under ``name``, or None."""
        state = self[name]
        return state.clip if state is not None else None

    def get_state(self, name: str) -> Optional[AnimationState]:
        """State registered under ``name``, or None."""
        index = self._state_indexes.get(name)
        if index is None:
            return None
        return self._states[index]

    def get_clip_count(self) -> int:
        return len(self._states)

    # ------------------------------------------------------------------
    # Playback control
    # ------------------------------------------------------------------
    def play(self, name: Optional[str] = None) -> bool:
        """
        Enable a state without touching the others.

        Args:
            name: State name (None for the default clip)

        Returns:
            True if the state exists and was enabled
        """
        if name is None:
            name = self.default_clip
        if not name:
            return False

        state = self.get_state(name)
        if state is None:
            return False

        player = state.player
        if player is not None and player.current_state is not state:
            # First play of this state: initialize the player's cursor
            player.start_clip(state.clip, state)
        else:
            state.enabled = True
        return True

    def play_queued(self, name: str, mode: QueueMode = QueueMode.COMPLETE_OTHERS):
        raise NotImplementedError("play_queued is not implemented")

    def rewind(self):
        raise NotImplementedError("rewind is not implemented")

    def stop(self, name: Optional[str] = None):
        """Disable one state, or every state when no name is given."""
        if name is None:
            for state in self._states:
                state.enabled = False
            return

        state = self.get_state(name)
        if state is not None:
            state.enabled = False

    def blend(
        self,
        name: str,
        weight: float = DEFAULT_BLEND_WEIGHT,
        length: float = DEFAULT_BLEND_LENGTH
    ) -> bool:
        """
        Switch to ``name``.

        Weight and length are accepted but no blending is performed:
        every state is stopped, then ``name`` is played.
        """
        self.stop()
        return self.play(name)

    def cross_fade(self, name: str, fade_length: float = DEFAULT_CROSSFADE_LENGTH) -> bool:
        """Switch to ``name`` (stop-then-play; no fade is applied)."""
        self.stop()
        return self.play(name)

    def is_playing(self, name: Optional[str] = None) -> bool:
        """
        Check whether a state is enabled.

        Args:
            name: State name (None checks every state)
        """
        if name is None:
            return self.any_playing

        state = self.get_state(name)
        return state.enabled if state is not None else False

    @property
    def any_playing(self) -> bool:
        return any(state.enabled for state in self._states)

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------
    def update_animation_states(self, delta_time: float):
        """
        Advance every enabled state.

        Args:
            delta_time: Time elapsed since last frame (seconds)
        """
        for state in self._states:
            if state.enabled:
                state.update(delta_time)

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------
    def __getitem__(self, name: str) -> Optional[AnimationState]:
        return self.get_state(name)

    def __contains__(self, name: str) -> bool:
        return name in self._state_indexes

    def __iter__(self) -> Iterator[AnimationState]:
        return iter(list(self._states))

    def __len__(self):
        return len(self._states)

    def __repr__(self):
        return (
            f"AnimationRegistry(states={len(self._states)}, default='{self.default_clip}', "
            f"playing={self.any_playing})"
        )
