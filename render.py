#!/usr/bin/env python3
# Renders the cursor of a replay to a video, timed the same way
# it would be against the song. Audio still has to be muxed in
# with ffmpeg afterwards, for DT/NC use -filter:a "atempo=1.5"
import sys, time, traceback
from collections import deque

import imageio
import numpy as np
from PIL import Image, ImageDraw

from osr import parse
from osrutils.config import loadSettings
from osrutils.errors import ReplayError, ConfigError
from osrutils.mods import mod_names, playback_rate
from playback import Synchronizer, SteppedClock, start_time

info  = sys.stdout.write
error = sys.stderr.write

# the playfield is 512x384, the canvas has a border around it
BORDER = 20

def draw_frame(trail, settings, percent=0.0):
    img = Image.new('RGBA', (settings['width'], settings['height']), (*settings['background'], 255))
    draw = ImageDraw.Draw(img)
    r = settings['cursor_size'] / 2
    for x, y in trail:
        x, y = x + BORDER, y + BORDER
        draw.ellipse((x - r, y - r, x + r, y + r), fill=tuple(settings['cursor_color']))
    # Progress bar
    w, h = settings['width'], settings['height']
    draw.rectangle((0, h - 4, w - 1, h - 1))
    draw.rectangle((0, h - 4, int((w - 2) * percent) + 1, h - 1), fill=(255, 255, 255))
    return np.array(img)

def render(replay, output=None, settings=None):
    settings = settings or loadSettings()
    if not replay.frames:
        raise ValueError('replay has no frames to render')
    start = time.perf_counter()
    header = replay.header
    rate = settings['rate'] or playback_rate(replay.mods)
    if output is None:
        output = f'{header.player_name}-{header.timestamp}-{header.replay_hash}.mp4'

    info(f'{header.player_name} +{",".join(mod_names(replay.mods)) or "NOMOD"} ({rate}x)\n')
    sync = Synchronizer(replay.frames)
    clock = SteppedClock(settings['fps'], rate, start_time(replay.frames))
    end_time = max(replay.frames[-1].time, 1)
    trail = deque(maxlen=settings['trail'])
    written = 0

    with imageio.get_writer(output, fps=settings['fps']) as video:
        frame = sync.tick(clock.read())
        while frame is not None:
            trail.append((frame.x, frame.y))
            percent = min(max(clock.read() / end_time, 0.0), 1.0)
            video.append_data(draw_frame(trail, settings, percent))
            written += 1
            info(f'{clock.read():>7}/{end_time} {percent * 100:.2f}% done.\r')
            frame = sync.tick(clock.tick())

    info(f'\nWrote {written} frames to {output} in {time.perf_counter() - start:.2f} seconds.\n')
    return written

def main(argv):
    if len(argv) < 2:
        error('You need to provide a replay to render!\n')
        return 1
    try:
        settings = loadSettings()
    except ConfigError as e:
        error(f'{e}\n')
        return 1
    try:
        replay = parse(argv[1])
    except (ReplayError, OSError):
        with open(settings['error_log'], 'a') as f:
            f.write(traceback.format_exc())
        error(f"Sorry, couldn't read {argv[1]}! Details are in {settings['error_log']}\n")
        return 1
    if not replay.frames:
        error(f'{argv[1]} has no cursor frames, nothing to render.\n')
        return 1
    render(replay, argv[2] if len(argv) > 2 else None, settings)
    return 0

if __name__ == '__main__':
    sys.exit(main(sys.argv))
