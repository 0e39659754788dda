# File: inflio/features/playback_sync/service/controller.py

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from inflio.features.transcript.domain.models import Segment, Transcription
from inflio.features.transcript.service.resolver import SegmentIndex
from ..domain.interfaces import IMediaHandle, IScroller
from ..domain.models import PlaybackEvent, SyncState, segment_element_id

logger = logging.getLogger(__name__)

ActiveChangeCallback = Callable[[Optional[Segment]], None]

_TRACKED_EVENTS = (PlaybackEvent.TIME_UPDATE, PlaybackEvent.SEEKED)


class PlaybackSyncController:
    """
    Keeps transcript highlighting in lockstep with video playback.

    One controller serves one mounted video + transcript pairing. While
    TRACKING, time-update and seek events both route to `handle_event`,
    which resolves the active segment and centres its row. Repeated events
    that resolve to the same segment are no-ops.
    """

    def __init__(self, scroller: IScroller, on_active_change: Optional[ActiveChangeCallback] = None):
        self.scroller = scroller
        self.on_active_change = on_active_change

        self._state = SyncState.IDLE
        self._media: Optional[IMediaHandle] = None
        self._transcription: Optional[Transcription] = None
        self._index: Optional[SegmentIndex] = None
        self._active: Optional[Segment] = None

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def active_segment(self) -> Optional[Segment]:
        return self._active

    def attach(self, media: Optional[IMediaHandle], transcription: Optional[Transcription]) -> bool:
        """
        Starts tracking. Returns False (and stays IDLE) when the video or
        the transcript is missing.
        """
        if self._state == SyncState.TRACKING:
            self.detach()

        if media is None or transcription is None:
            logger.debug("Playback sync not started: video or transcript missing.")
            return False

        self._media = media
        self._transcription = transcription
        self._index = SegmentIndex(transcription.segments, transcription.revision)

        for event in _TRACKED_EVENTS:
            media.add_listener(event, self.handle_event)

        self._state = SyncState.TRACKING
        logger.info(f"Playback sync tracking {len(transcription.segments)} segments.")
        return True

    def detach(self) -> None:
        """Stops tracking and releases the listeners. Safe to call when IDLE."""
        if self._media is not None:
            for event in _TRACKED_EVENTS:
                self._media.remove_listener(event, self.handle_event)

        self._media = None
        self._transcription = None
        self._index = None
        self._active = None
        self._state = SyncState.IDLE

    @contextmanager
    def tracking(self, media: Optional[IMediaHandle], transcription: Optional[Transcription]) -> Iterator["PlaybackSyncController"]:
        """Scoped tracking: listeners are detached on every exit path."""
        try:
            self.attach(media, transcription)
            yield self
        finally:
            self.detach()

    def handle_event(self) -> bool:
        """
        Resolves the active segment for the current playback position.

        Returns:
            True if the active segment changed, False for a no-op.
        """
        if self._state != SyncState.TRACKING or self._media is None:
            return False

        segment = self._current_index().lookup(self._media.current_time)

        if _segment_key(segment) == _segment_key(self._active):
            return False

        self._active = segment
        if segment is not None:
            self.scroller.center_on(segment_element_id(segment))

        # Listeners run after the scroll
        if self.on_active_change is not None:
            self.on_active_change(segment)
        return True

    def jump_to(self, segment_id: str) -> bool:
        """Seeks the video to a segment's start and resumes playback."""
        if self._state != SyncState.TRACKING:
            return False

        segment = self._transcription.get_segment(segment_id)
        if segment is None:
            logger.warning(f"Cannot jump to unknown segment {segment_id}")
            return False

        self._media.seek(segment.start)
        self._media.play()
        return True

    def _current_index(self) -> SegmentIndex:
        # The editor may have changed or replaced segments since the index was built
        if self._index.is_stale(self._transcription.segments, self._transcription.revision):
            self._index = SegmentIndex(self._transcription.segments, self._transcription.revision)
        return self._index


def _segment_key(segment: Optional[Segment]) -> Optional[str]:
    return segment.id if segment is not None else None
