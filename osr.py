import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from osrutils.parser import (ReplayHeader, ReplayFrame, ONLINE_ID_VERSION,
    parseHeader, parseBlob, parseNum, decompressFrames, parseReplayString)

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class Replay:
    header: ReplayHeader
    compressed: bytes
    decompressed: Optional[bytes] = None
    # None when the replay was parsed with decompress=False
    frames: Optional[Tuple[ReplayFrame, ...]] = None
    online_id: Optional[int] = None
    seed: int = 0

    @property
    def mods(self):
        return self.header.mods

    def __repr__(self):
        return f'{self.header.player_name} - {self.header.replay_hash} ({self.header.timestamp})'

def parse_bytes(data, decompress=True):
    header, offset = parseHeader(data)
    compressed, offset = parseBlob(data, offset)
    decompressed, frames, seed = None, None, 0
    if decompress:
        decompressed, text = decompressFrames(compressed)
        frames, seed = parseReplayString(text)
        frames = tuple(frames)
    online_id = None
    if header.version >= ONLINE_ID_VERSION:
        online_id, offset = parseNum(data, offset, 'q', 'online_id')
    if offset < len(data):
        log.debug('%d trailing bytes after replay data', len(data) - offset)
    replay = Replay(header, compressed, decompressed, frames, online_id, seed)
    log.info('parsed %r: %s frames', replay, 'no' if frames is None else len(frames))
    return replay

def parse(source, decompress=True):
    """
    Reads a whole replay from a path, a bytes object or a binary file.

    decompress=False skips the lzma step and frame parsing, which is most of
    the work, for when only the header is wanted.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    elif hasattr(source, 'read'):
        data = source.read()
    else:
        with open(source, 'rb') as f:
            data = f.read()
    return parse_bytes(data, decompress)
