"""
Per-user flight map session.

Owns the current upload, the year filter, the scene and the playback
engine, and notifies listeners of upload, filter and playback events.
Each upload replaces the previous session data entirely.
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, Dict, List, Optional

from flightmap.charts.route_map import render_static_scene
from flightmap.charts.scene import SceneState
from flightmap.config import PlaybackConfig
from flightmap.exceptions import PlaybackInProgressError
from flightmap.playback.engine import FrameCallback, PlaybackEngine, PlaybackState
from flightmap.schemas.airport import ReferenceData
from flightmap.schemas.visualization import FlightVisualization
from flightmap.services.filter_service import filter_by_year, get_year_counts
from flightmap.services.upload_service import UploadOutcome, process_upload

logger = logging.getLogger(__name__)

__all__ = ["SessionEvent", "FlightMapSession"]

Listener = Callable[..., Any]


class SessionEvent(Enum):
    """
    Events emitted to the UI layer.

    Listener arguments:
        UPLOAD_COMPLETE: (ParseResult, VisualizationResult)
        FILTER_CHANGED: (year or None, list of FlightVisualization)
        PLAYBACK_START: (number of flights)
        PLAYBACK_STOP: (PlaybackState outcome)
    """

    UPLOAD_COMPLETE = "upload_complete"
    FILTER_CHANGED = "filter_changed"
    PLAYBACK_START = "playback_start"
    PLAYBACK_STOP = "playback_stop"


class FlightMapSession:
    """
    Session state for one user of the map.

    Attributes:
        reference: Airport and replacement tables shared by all sessions.
        scene: Scene drawn for this session.
        outcome: Results of the latest upload, if any.
        selected_year: Active year filter, or None for all years.
    """

    def __init__(
        self,
        reference: ReferenceData,
        scene: Optional[SceneState] = None,
        playback_config: Optional[PlaybackConfig] = None,
        on_frame: Optional[FrameCallback] = None,
    ) -> None:
        self.reference = reference
        self.scene = scene or SceneState()
        self.outcome: Optional[UploadOutcome] = None
        self.selected_year: Optional[int] = None
        self.engine = PlaybackEngine(self.scene, playback_config, on_frame)
        self._listeners: DefaultDict[SessionEvent, List[Listener]] = defaultdict(list)

    def _ensure_idle(self) -> None:
        if self.engine.is_playing:
            raise PlaybackInProgressError()

    def subscribe(self, event: SessionEvent, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def _publish(self, event: SessionEvent, *args: Any) -> None:
        for listener in self._listeners[event]:
            listener(*args)

    @property
    def visualizations(self) -> List[FlightVisualization]:
        """All resolved flights of the latest upload."""
        if self.outcome is None:
            return []
        return list(self.outcome.visualization_result.visualizations)

    @property
    def visible_visualizations(self) -> List[FlightVisualization]:
        """Resolved flights after the year filter."""
        return filter_by_year(self.visualizations, self.selected_year)

    def year_counts(self) -> Dict[int, int]:
        return get_year_counts(self.visualizations)

    def upload(self, filename: str, data: bytes) -> UploadOutcome:
        """
        Replace the session data with a new upload and redraw the map.

        Raises:
            PlaybackInProgressError: If a playback is still running.
        """
        self._ensure_idle()
        self.outcome = process_upload(filename, data, self.reference)
        self.selected_year = None

        render_static_scene(self.scene, self.visualizations)
        self._publish(
            SessionEvent.UPLOAD_COMPLETE,
            self.outcome.parse_result,
            self.outcome.visualization_result,
        )
        return self.outcome

    def set_year(self, year: Optional[int]) -> List[FlightVisualization]:
        """Apply the year filter and redraw the map."""
        self._ensure_idle()
        self.selected_year = year
        visible = self.visible_visualizations
        render_static_scene(self.scene, visible)
        logger.info("Year filter set to %s: %d flights", year, len(visible))
        self._publish(SessionEvent.FILTER_CHANGED, year, visible)
        return visible

    async def start_playback(
        self, on_frame: Optional[FrameCallback] = None
    ) -> PlaybackState:
        """Replay the visible flights; see PlaybackEngine.play."""
        self._ensure_idle()
        visible = self.visible_visualizations
        self._publish(SessionEvent.PLAYBACK_START, len(visible))
        outcome = await self.engine.play(visible, on_frame)
        self._publish(SessionEvent.PLAYBACK_STOP, outcome)
        return outcome

    def stop_playback(self) -> None:
        self.engine.stop()
