"""Builds .osr bytes for the tests, the library itself never writes replays."""
import lzma
import struct

import pytest


def write_uleb(n):
    out = bytearray()
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def write_string(s, marker=0x0b):
    data = s.encode('utf-8')
    return bytes([marker]) + write_uleb(len(data)) + data


HEADER_DEFAULTS = {
    'game_mode': 0,
    'version': 20140721,
    'beatmap_hash': 'd41d8cd98f00b204e9800998ecf8427e',
    'player_name': 'peppy',
    'replay_hash': '9e107d9d372bb6826bd81d3542a419d6',
    'count_300': 412,
    'count_100': 17,
    'count_50': 2,
    'count_geki': 88,
    'count_katu': 9,
    'count_miss': 1,
    'total_score': 5381402,
    'max_combo': 611,
    'perfect': False,
    'mods': 72, # HD DT
    'lifebar_graph': '1|0,0.98|15000,',
    'timestamp': 635391234567890000,
}


def build_header(**fields):
    h = dict(HEADER_DEFAULTS, **fields)
    data = struct.pack('<Bi', h['game_mode'], h['version'])
    data += write_string(h['beatmap_hash'])
    data += write_string(h['player_name'])
    data += write_string(h['replay_hash'])
    data += struct.pack('<HHHHHHiH?I', h['count_300'], h['count_100'], h['count_50'],
        h['count_geki'], h['count_katu'], h['count_miss'], h['total_score'],
        h['max_combo'], h['perfect'], h['mods'])
    data += write_string(h['lifebar_graph'])
    data += struct.pack('<q', h['timestamp'])
    return data


def compress(text):
    return lzma.compress(text.encode('ascii'), format=lzma.FORMAT_ALONE)


def build_replay(frames_text='0|256|-500|0,-1|256|-500|0,16|10|20|1,17|11.5|21|1,-12345|0|0|7,',
                 online_id=123456789, blob=None, **fields):
    data = build_header(**fields)
    if blob is None:
        blob = compress(frames_text)
    data += struct.pack('<i', len(blob)) + blob
    if dict(HEADER_DEFAULTS, **fields)['version'] >= 20140721:
        data += struct.pack('<q', online_id)
    return data


@pytest.fixture
def replay_bytes():
    return build_replay()
