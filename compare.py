import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from collections import deque
from osr import parse
from osrutils.config import loadSettings
from osrutils.mods import playback_rate
from playback import Synchronizer, WallClock, start_time
import sys, time


def step(syncs, trails, clock_time):
    # one clock, every replay follows it
    for sync, trail in zip(syncs, trails):
        frame = sync.tick(clock_time)
        if frame is not None:
            trail.append((frame.x, frame.y))
    return all(sync.ended for sync in syncs)


def draw(path1, path2, settings=None):
    settings = settings or loadSettings()
    start = time.time()
    fps = settings['fps']
    r1 = parse(path1)
    r2 = parse(path2)
    syncs = [Synchronizer(r1.frames), Synchronizer(r2.frames)]
    trails = [deque(maxlen=settings['trail']) for _ in syncs]
    rate = settings['rate'] or playback_rate(r1.mods)
    # live window, so the clock is real time rather than one step per drawn frame
    clock = WallClock(rate, min(start_time(r1.frames), start_time(r2.frames)))
    end_time = max((r.frames[-1].time for r in (r1, r2) if r.frames), default=0)

    fig, ax = plt.subplots()
    ax.axis('off')
    ax.set_xlim(0, 512)
    ax.set_ylim(384, 0)
    p1 = ax.scatter([], [], 50, 'red', label=r1.header.player_name)
    p2 = ax.scatter([], [], 50, 'blue', label=r2.header.player_name)
    ax.legend(loc='upper right')

    def ticks():
        # runs until both replays are done
        while not step(syncs, trails, clock.read()):
            yield clock.read()

    def update(now):
        for points, trail in zip((p1, p2), trails):
            if trail:
                points.set_offsets(list(trail))
        print(f'{min(now / max(end_time, 1), 1) * 100:.2f}%', end='\r')
        return p1, p2

    ani = FuncAnimation(
        fig,
        update,
        frames=ticks,
        cache_frame_data=False,
        interval=1000 / fps,
        blit=True,
        repeat=False)
    plt.show()
    print(f'\nFinished in {int(time.time() - start)} seconds.')

    return ani


if __name__ == '__main__':
    import os
    if len(sys.argv) < 3:
        print('Please provide two replays.')
        exit(0)
    path1 = sys.argv[1]
    path2 = sys.argv[2]
    if not os.path.exists(path1) or not os.path.exists(path2):
        print('Please provide two valid replays.')
        exit(0)

    draw(path1, path2)
