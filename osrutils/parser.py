"""
Readers for the pieces of an .osr file.

Every parse function takes the raw replay bytes and an offset and returns
(value, new offset), so the whole file can be walked in one forward pass.
"""
import logging, lzma
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from struct import unpack_from, calcsize, error as StructError

from osrutils.errors import FormatError, TruncatedError
from osrutils.mods import Mods

log = logging.getLogger(__name__)

STRING_MARKER = 0x0b
SEED_MARKER = '-12345'
# replays from this version on end with the online score id
ONLINE_ID_VERSION = 20140721

class GameMode(IntEnum):
    STANDARD = 0
    TAIKO = 1
    CATCH = 2
    MANIA = 3

@dataclass(frozen=True)
class ReplayFrame:
    time: int
    x: float
    y: float

@dataclass(frozen=True)
class ReplayHeader:
    game_mode: GameMode
    version: int
    beatmap_hash: str
    player_name: str
    replay_hash: str
    count_300: int
    count_100: int # 150s in taiko, 200s in mania
    count_50: int # small fruit in ctb
    count_geki: int # max 300s in mania
    count_katu: int # 100s in mania
    count_miss: int
    total_score: int
    max_combo: int
    perfect: bool
    mods: Mods
    lifebar_graph: str
    timestamp: int # .NET ticks

    @property
    def played_at(self):
        return parseDate(self.timestamp)

    @property
    def life_graph(self):
        return parseLifeGraph(self.lifebar_graph)

def parseNum(db, offset, fmt, field):
    size = calcsize('<' + fmt)
    try:
        val = unpack_from('<' + fmt, db, offset)[0]
    except StructError:
        raise TruncatedError(field, offset, size) from None
    return (val, offset + size)

def parseBool(db, offset, field):
    val, offset = parseNum(db, offset, 'B', field)
    return (val != 0, offset)

def parseULEB(db, offset, field):
    length = 0
    shift = 0
    while True:
        if offset >= len(db):
            raise TruncatedError(field, offset, 1)
        val = db[offset]
        offset += 1
        length |= (val & 0x7F) << shift
        if val & 0x80 == 0:
            break
        shift += 7
    return (length, offset)

def parseString(db, offset, field):
    marker, offset = parseNum(db, offset, 'B', field)
    if marker != STRING_MARKER:
        raise FormatError(field, f'invalid string marker 0x{marker:02x} at offset {offset - 1}')
    length, offset = parseULEB(db, offset, field)
    offsetEnd = offset + length
    if offsetEnd > len(db):
        raise TruncatedError(field, offset, length)
    # BinaryReader.ReadString swaps bad sequences for U+FFFD rather than failing
    string = bytes(db[offset:offsetEnd]).decode('utf-8', errors='replace')
    return (string, offsetEnd)

def parseDate(ticks):
    # ticks are 100ns steps since 0001-01-01
    return datetime(1, 1, 1, tzinfo=timezone.utc) + timedelta(microseconds=ticks // 10)

def parseLifeGraph(graphString):
    result = []
    for hp in graphString.split(','):
        if '|' not in hp:
            continue
        life, time = hp.split('|')[:2]
        try:
            result.append((int(time), float(life)))
        except ValueError:
            raise FormatError('lifebar_graph', f'bad entry {hp!r}') from None
    return result

def parseHeader(db, offset=0):
    mode, offset = parseNum(db, offset, 'B', 'game_mode')
    try:
        mode = GameMode(mode)
    except ValueError:
        raise FormatError('game_mode', f'unknown game mode {mode}') from None
    version, offset = parseNum(db, offset, 'i', 'version')
    beatmapHash, offset = parseString(db, offset, 'beatmap_hash')
    player, offset = parseString(db, offset, 'player_name')
    replayHash, offset = parseString(db, offset, 'replay_hash')
    counts = []
    for field in ('count_300', 'count_100', 'count_50', 'count_geki', 'count_katu', 'count_miss'):
        val, offset = parseNum(db, offset, 'H', field)
        counts.append(val)
    score, offset = parseNum(db, offset, 'i', 'total_score')
    combo, offset = parseNum(db, offset, 'H', 'max_combo')
    perfect, offset = parseBool(db, offset, 'perfect')
    # same four bytes as the signed field, read unsigned so the flag value stays positive
    mods, offset = parseNum(db, offset, 'I', 'mods')
    lifebar, offset = parseString(db, offset, 'lifebar_graph')
    timestamp, offset = parseNum(db, offset, 'q', 'timestamp')
    header = ReplayHeader(mode, version, beatmapHash, player, replayHash, *counts,
        score, combo, perfect, Mods(mods), lifebar, timestamp)
    return (header, offset)

def parseBlob(db, offset, field='compressed_length'):
    length, offset = parseNum(db, offset, 'i', field)
    if length < 0:
        raise FormatError(field, f'negative length {length}')
    offsetEnd = offset + length
    if offsetEnd > len(db):
        raise TruncatedError('compressed_frames', offset, length)
    return (bytes(db[offset:offsetEnd]), offsetEnd)

def decompressFrames(blob):
    try:
        data = lzma.decompress(blob)
    except lzma.LZMAError as e:
        raise FormatError('frames', f'could not decompress frame data ({e})') from e
    # non-ascii bytes become U+FFFD and only matter if they land in a number
    return data, data.decode('ascii', errors='replace')

# int() and float() take digit separators like 1_000, replays never have them
def parseInt(text):
    if '_' in text:
        raise ValueError(text)
    return int(text)

def parseFloat(text):
    if '_' in text:
        raise ValueError(text)
    return float(text)

def parseReplayString(replayString):
    """
    Turns the decompressed `w|x|y|z,` text into frames.

    w is the time since the previous frame, so times are summed up starting
    from a zero frame. Lines with fewer than four fields are junk and get
    skipped; lines that have the fields but hold garbage are an error.
    Returns (frames, seed).
    """
    frames = []
    seed = 0
    skipped = 0
    lastFrame = ReplayFrame(0, 0.0, 0.0)
    for n, line in enumerate(replayString.split(',')):
        if not line:
            continue
        data = line.split('|')
        if len(data) < 4:
            skipped += 1
            continue
        try:
            # -12345 has the rng seed on z
            if data[0] == SEED_MARKER:
                seed = parseInt(data[3])
                continue
            frame = ReplayFrame(parseInt(data[0]) + lastFrame.time, parseFloat(data[1]), parseFloat(data[2]))
        except ValueError:
            raise FormatError(f'frame line {n}', f'bad value in {line!r}') from None
        frames.append(frame)
        lastFrame = frame
    if skipped:
        log.debug('skipped %d short frame lines', skipped)
    return (frames, seed)
