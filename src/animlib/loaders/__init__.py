"""Loader utilities for animation clips."""

from .gltf_clip_loader import GltfClipLoader
from .clip_library import ClipLibrary

__all__ = ['GltfClipLoader', 'ClipLibrary']
