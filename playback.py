"""
Keeps a replay's cursor in step with a clock.

The clock is the boss: audio plays at its own pace, so every tick we look at
where the clock is and move the frame index to match, instead of counting
ticks. Clock readings are milliseconds with playback rate already applied.
"""
import logging, time
from dataclasses import dataclass, replace

log = logging.getLogger(__name__)

# closer than this and we just step forward one frame
DRIFT_THRESHOLD = 10

@dataclass(frozen=True)
class PlaybackState:
    index: int = 0
    ended: bool = False

def advance(state, frames, clock_time):
    if state.ended:
        return state
    if state.index >= len(frames):
        return replace(state, ended=True)

    index = state.index
    diff = frames[index].time - clock_time
    if abs(diff) >= DRIFT_THRESHOLD:
        # resync: newest frame that has already happened, never going back
        for i in range(state.index, len(frames)):
            if frames[i].time - clock_time <= 0:
                index = i
        # clock is already past the last frame, which has had its tick
        if index == state.index == len(frames) - 1 and diff < 0:
            index += 1
        if index != state.index:
            log.debug('resynced %d -> %d at %dms', state.index, index, clock_time)
    elif diff != 0:
        index += 1

    return PlaybackState(index, index >= len(frames))

class Synchronizer:
    def __init__(self, frames):
        if frames is None:
            raise ValueError('replay was parsed without frames')
        self.frames = frames
        self.state = PlaybackState()

    @property
    def ended(self):
        return self.state.ended

    def tick(self, clock_time):
        self.state = advance(self.state, self.frames, clock_time)
        return self.current_frame()

    def current_frame(self):
        if self.state.ended or self.state.index >= len(self.frames):
            return None
        return self.frames[self.state.index]

def start_time(frames):
    # the first frame is a skip marker, audio starts at the one after it
    if len(frames) < 2:
        return 0
    return frames[1].time

class SteppedClock:
    """Fake audio clock for rendering, moves one video frame per tick."""
    def __init__(self, fps, rate=1.0, start=0):
        self.step = 1000 / fps * rate
        self.start = start
        self.ticks = 0

    def read(self):
        return int(self.start + self.ticks * self.step)

    def tick(self):
        self.ticks += 1
        return self.read()

class WallClock:
    def __init__(self, rate=1.0, start=0):
        self.rate = rate
        self.start = start
        self.began = None

    def read(self):
        if self.began is None:
            self.began = time.perf_counter()
        return int(self.start + (time.perf_counter() - self.began) * 1000 * self.rate)
