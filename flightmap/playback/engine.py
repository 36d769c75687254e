"""
Sequential playback of flights in departure order.

The engine replays a visualization set on the shared scene: airports
appear as they are first used, and each route is drawn segment by
segment behind a moving marker. Playback is a coroutine that yields
between segments, so a stop request made from the same event loop is
honored at the next segment boundary.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

from flightmap.charts.colors import AirportColoring, build_airport_coloring
from flightmap.charts.geodesic import build_route_segments, popup_segment_index
from flightmap.charts.popups import route_popup
from flightmap.charts.route_map import (
    RouteGroup,
    assign_to_group,
    draw_airport_marker,
    render_static_scene,
)
from flightmap.charts.scene import SceneState
from flightmap.config import FlightMapConfig, PlaybackConfig
from flightmap.exceptions import PlaybackInProgressError
from flightmap.schemas.airport import Airport
from flightmap.schemas.visualization import FlightVisualization

logger = logging.getLogger(__name__)

__all__ = ["PlaybackState", "PlaybackEngine"]

FrameCallback = Callable[[SceneState], None]


class PlaybackState(Enum):
    """Lifecycle of one playback run."""

    IDLE = "idle"
    PLAYING = "playing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PlaybackEngine:
    """
    Cancellable replay of flights on a scene.

    State machine: IDLE -> PLAYING -> IDLE, with COMPLETED or CANCELLED
    kept as the run outcome.
    Only one run may be active; the abort flag set by stop() is the only
    channel between a stop request and the running loop.

    Attributes:
        _scene: Scene shared with the static renderer.
        _config: Playback timing.
        _on_frame: Called after every visible change.
    """

    def __init__(
        self,
        scene: SceneState,
        config: Optional[PlaybackConfig] = None,
        on_frame: Optional[FrameCallback] = None,
    ) -> None:
        self._scene = scene
        self._config = config or FlightMapConfig.playback
        self._on_frame = on_frame
        self._state = PlaybackState.IDLE
        self._abort = False
        self._last_outcome: Optional[PlaybackState] = None
        self._highlights: Dict[str, asyncio.TimerHandle] = {}
        self._groups: Dict[str, RouteGroup] = {}

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def last_outcome(self) -> Optional[PlaybackState]:
        """Terminal state of the most recent run, if any."""
        return self._last_outcome

    def stop(self) -> None:
        """Request cancellation; the running loop unwinds at its next check."""
        if self.is_playing:
            logger.info("Playback stop requested")
            self._abort = True

    async def play(
        self,
        visualizations: Sequence[FlightVisualization],
        on_frame: Optional[FrameCallback] = None,
    ) -> PlaybackState:
        """
        Replay flights in ascending departure order.

        Args:
            visualizations: Flights to replay, in their display order.
            on_frame: Frame callback for this run, replacing the one given
                at construction.

        Returns:
            COMPLETED if every flight was animated, CANCELLED if stopped.

        Raises:
            PlaybackInProgressError: If another run is active.
        """
        if self._state is not PlaybackState.IDLE:
            raise PlaybackInProgressError()

        if on_frame is not None:
            self._on_frame = on_frame
        self._state = PlaybackState.PLAYING
        self._abort = False
        self._groups = {}
        logger.info("Playback started with %d flights", len(visualizations))

        try:
            outcome = await self._run(visualizations)
        except asyncio.CancelledError:
            self._finish_cancelled(visualizations)
            self._last_outcome = PlaybackState.CANCELLED
            raise
        finally:
            self._abort = False
            self._state = PlaybackState.IDLE

        self._last_outcome = outcome
        logger.info("Playback %s", outcome.value)
        return outcome

    async def _run(self, visualizations: Sequence[FlightVisualization]) -> PlaybackState:
        ordered = sorted(visualizations, key=lambda v: v.departure_timestamp)
        coloring = build_airport_coloring(ordered)

        self._scene.clear()
        self._emit()

        for visualization in ordered:
            if self._abort:
                self._finish_cancelled(visualizations)
                return PlaybackState.CANCELLED

            self._reveal_airport(visualization.from_airport, coloring)
            self._reveal_airport(visualization.to_airport, coloring)
            self._emit()

            completed = await self._animate_route(visualization, coloring)
            if not completed:
                self._finish_cancelled(visualizations)
                return PlaybackState.CANCELLED

        self._cancel_highlights()
        self._emit()
        return PlaybackState.COMPLETED

    def _reveal_airport(self, airport: Airport, coloring: AirportColoring) -> None:
        code = airport.iata_code
        if not self._scene.has_marker(code):
            draw_airport_marker(self._scene, airport, coloring)
            return

        # A repeat reveal restarts the highlight window
        previous = self._highlights.pop(code, None)
        if previous is not None:
            previous.cancel()

        self._scene.highlight(code)
        loop = asyncio.get_running_loop()
        self._highlights[code] = loop.call_later(
            self._config.highlight_seconds, self._end_highlight, code
        )

    def _end_highlight(self, code: str) -> None:
        self._highlights.pop(code, None)
        self._scene.clear_highlight(code)
        self._emit()

    async def _animate_route(
        self, visualization: FlightVisualization, coloring: AirportColoring
    ) -> bool:
        """
        Draw one flight's segments in path order.

        Returns:
            False if the run was aborted before the last segment.
        """
        group = assign_to_group(self._groups, visualization)
        key = visualization.route_key
        segments = build_route_segments(
            visualization.from_coordinates,
            visualization.to_coordinates,
            coloring.color_for(visualization.from_code),
            coloring.color_for(visualization.to_code),
        )

        self._scene.add_route(
            key=key,
            from_code=visualization.from_code,
            to_code=visualization.to_code,
            popup=route_popup(
                group.from_airport.iata_code,
                group.to_airport.iata_code,
                group.outbound,
                group.returning,
            ),
            popup_segment=popup_segment_index(segments),
        )

        for segment in segments:
            if self._abort:
                return False
            self._scene.add_segment(key, segment)
            self._scene.set_moving_marker(key, segment.trailing_point)
            self._emit()
            await asyncio.sleep(self._config.segment_delay_seconds)

        self._scene.remove_moving_marker()
        self._emit()
        return True

    def _cancel_highlights(self) -> None:
        for code, handle in self._highlights.items():
            handle.cancel()
            self._scene.clear_highlight(code)
        self._highlights = {}

    def _finish_cancelled(self, visualizations: Sequence[FlightVisualization]) -> None:
        """Leave the scene in the full static state."""
        self._cancel_highlights()
        self._scene.remove_moving_marker()
        render_static_scene(self._scene, visualizations)
        self._emit()
        logger.info("Playback cancelled, static scene restored")

    def _emit(self) -> None:
        if self._on_frame is not None:
            self._on_frame(self._scene)
