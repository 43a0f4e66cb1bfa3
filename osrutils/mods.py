from enum import IntFlag

class Mods(IntFlag):
    NO_MOD = 0
    NO_FAIL = 1 << 0
    EASY = 1 << 1
    TOUCH_DEVICE = 1 << 2
    HIDDEN = 1 << 3
    HARD_ROCK = 1 << 4
    SUDDEN_DEATH = 1 << 5
    DOUBLE_TIME = 1 << 6
    RELAX = 1 << 7
    HALF_TIME = 1 << 8
    NIGHTCORE = 1 << 9 # always set together with DOUBLE_TIME
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUN_OUT = 1 << 12
    AUTOPILOT = 1 << 13
    PERFECT = 1 << 14
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADE_IN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET_PRACTICE = 1 << 23
    KEY9 = 1 << 24
    KEY_COOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCORE_V2 = 1 << 29
    LAST_MOD = 1 << 30

    KEY_MOD = KEY1 | KEY2 | KEY3 | KEY4 | KEY5 | KEY6 | KEY7 | KEY8 | KEY9 | KEY_COOP
    FREE_MOD_ALLOWED = NO_FAIL | EASY | HIDDEN | HARD_ROCK | SUDDEN_DEATH | FLASHLIGHT \
        | FADE_IN | RELAX | AUTOPILOT | SPUN_OUT | KEY_MOD
    SCORE_INCREASE_MODS = HIDDEN | HARD_ROCK | DOUBLE_TIME | FLASHLIGHT | FADE_IN

# one entry per bit, in bit order, so composites never show up here
SINGLE_MODS = [m for m in Mods.__members__.values() if m and m & (m - 1) == 0]

def mod_names(mods):
    return [m.name for m in SINGLE_MODS if mods & m]

def playback_rate(mods):
    """Speed the audio plays at for these mods, 1.0 for nomod."""
    if mods & (Mods.DOUBLE_TIME | Mods.NIGHTCORE): return 1.5
    if mods & Mods.HALF_TIME: return 0.75
    return 1.0
