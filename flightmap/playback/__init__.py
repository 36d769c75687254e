"""
Playback module for the sequential flight animation.
"""

from flightmap.playback.engine import PlaybackEngine, PlaybackState

__all__ = ["PlaybackEngine", "PlaybackState"]
