"""
Transcript-to-playback synchronization for the session player.

``SegmentIndex`` maps a playback offset to the transcript segment whose
``[start_seconds, end_seconds)`` interval contains it, using a binary
search over segment start times.  ``TranscriptFollower`` holds the state
of one open player: the currently highlighted segment and whether the
viewer has recently scrolled the transcript by hand, in which case
auto-scroll is held back until the viewer has been idle for
``suppress_seconds``.
"""

from __future__ import annotations

import math
import time
from bisect import bisect_right
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from archive_common.models import TranscriptSegment


class SegmentIndex:
    """Binary-searchable view of a session's segments ordered by start time.

    Segments are usually stored in start order already; sorting here keeps
    the lookup correct when ``seq`` and start times disagree.
    """

    def __init__(self, segments: Sequence[TranscriptSegment]) -> None:
        self._ordered = sorted(segments, key=lambda s: (s.start_seconds, s.seq))
        self._starts = [s.start_seconds for s in self._ordered]
        # Running max of end times bounds the backward scan in locate().
        self._reach: list[float] = []
        reach = float("-inf")
        for s in self._ordered:
            reach = max(reach, s.end_seconds)
            self._reach.append(reach)

    def __len__(self) -> int:
        return len(self._ordered)

    def locate(self, seconds: float) -> TranscriptSegment | None:
        """Return the segment covering *seconds*, or ``None`` for a gap.

        When segments overlap or nest, the covering segment with the latest
        start wins.  ``None`` is also returned before the first segment,
        past the end of every segment, and for non-finite input.
        """
        if not math.isfinite(seconds):
            return None
        i = bisect_right(self._starts, seconds) - 1
        while i >= 0 and self._reach[i] > seconds:
            segment = self._ordered[i]
            if seconds < segment.end_seconds:
                return segment
            i -= 1
        return None


@dataclass(frozen=True)
class FollowUpdate:
    """Instruction for the browser: highlight ``seq``, scroll to it if ``scroll``."""

    seq: int
    start_seconds: float
    scroll: bool


class TranscriptFollower:
    """Tracks the active segment for one player and decides when to auto-scroll."""

    def __init__(
        self,
        index: SegmentIndex,
        suppress_seconds: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._index = index
        self._suppress_seconds = suppress_seconds
        self._clock = clock
        self._resume_at = float("-inf")
        self.active_seq: int | None = None

    @property
    def user_scrolling(self) -> bool:
        return self._clock() < self._resume_at

    def note_user_scroll(self) -> None:
        """Record a manual scroll; each call restarts the suppression window."""
        self._resume_at = self._clock() + self._suppress_seconds

    def observe(self, seconds: float) -> FollowUpdate | None:
        """Feed the player's current time.

        Returns an update only when the covering segment changes.  A gap
        between segments keeps the previous segment active.
        """
        segment = self._index.locate(seconds)
        if segment is None or segment.seq == self.active_seq:
            return None
        self.active_seq = segment.seq
        return FollowUpdate(
            seq=segment.seq,
            start_seconds=segment.start_seconds,
            scroll=not self.user_scrolling,
        )
