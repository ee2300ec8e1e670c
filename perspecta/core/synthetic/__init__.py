"""Synthetic scene generation for testing and demos."""

from .scene_gen import SceneGenerator, look_at

__all__ = [
    "SceneGenerator",
    "look_at",
]
