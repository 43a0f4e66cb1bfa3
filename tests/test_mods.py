from functools import reduce

from osrutils.mods import Mods, SINGLE_MODS, mod_names, playback_rate


def union(*mods):
    return reduce(lambda a, b: a | b, mods)


def test_bit_values():
    assert Mods.NO_FAIL == 1
    assert Mods.HIDDEN == 8
    assert Mods.DOUBLE_TIME == 64
    assert Mods.HALF_TIME == 256
    assert Mods.KEY4 == 1 << 15
    assert Mods.KEY2 == 1 << 28
    assert Mods.LAST_MOD == 1 << 30


def test_composites_are_unions():
    assert Mods.KEY_MOD == union(Mods.KEY1, Mods.KEY2, Mods.KEY3, Mods.KEY4, Mods.KEY5,
        Mods.KEY6, Mods.KEY7, Mods.KEY8, Mods.KEY9, Mods.KEY_COOP)
    assert Mods.SCORE_INCREASE_MODS == union(Mods.HIDDEN, Mods.HARD_ROCK, Mods.DOUBLE_TIME,
        Mods.FLASHLIGHT, Mods.FADE_IN)
    assert Mods.FREE_MOD_ALLOWED == union(Mods.NO_FAIL, Mods.EASY, Mods.HIDDEN, Mods.HARD_ROCK,
        Mods.SUDDEN_DEATH, Mods.FLASHLIGHT, Mods.FADE_IN, Mods.RELAX, Mods.AUTOPILOT,
        Mods.SPUN_OUT, Mods.KEY_MOD)


def test_single_mods_are_distinct_bits():
    values = [int(m) for m in SINGLE_MODS]
    assert len(values) == len(set(values)) == 31
    assert values == [1 << i for i in range(31)]


def test_membership():
    mods = Mods(72)
    assert mods & Mods.HIDDEN
    assert not mods & Mods.HARD_ROCK
    assert mods & Mods.SCORE_INCREASE_MODS
    assert not Mods(Mods.KEY7) & Mods.SCORE_INCREASE_MODS


def test_unknown_bits_survive():
    assert int(Mods(1 << 31 | 8)) == 1 << 31 | 8


def test_mod_names():
    assert mod_names(Mods(72)) == ['HIDDEN', 'DOUBLE_TIME']
    assert mod_names(Mods.NO_MOD) == []


def test_playback_rate():
    assert playback_rate(Mods.NO_MOD) == 1.0
    assert playback_rate(Mods.DOUBLE_TIME | Mods.HIDDEN) == 1.5
    assert playback_rate(Mods.NIGHTCORE | Mods.DOUBLE_TIME) == 1.5
    assert playback_rate(Mods.HALF_TIME) == 0.75
