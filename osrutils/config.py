import json, os

from osrutils.errors import ConfigError

DEFAULTS = {
    'width': 552,
    'height': 424,
    'fps': 60,
    'trail': 5,
    'cursor_size': 10,
    'cursor_color': [0, 255, 205],
    'background': [0, 0, 0],
    'rate': None, # None means work it out from the mods
    'error_log': 'errors.log',
}

def isNumber(value):
    # json true/false come back as bools, which are ints too
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def loadSettings(path='config.json'):
    settings = dict(DEFAULTS)
    if not os.path.exists(path):
        return settings
    try:
        with open(path, encoding='utf-8') as f:
            loaded = json.loads(f.read())
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f'could not read {path}: {e}') from e
    if not isinstance(loaded, dict):
        raise ConfigError(f'{path} should hold a json object')
    unknown = set(loaded) - set(DEFAULTS)
    if unknown:
        raise ConfigError(f'unknown settings in {path}: {", ".join(sorted(unknown))}')
    settings.update(loaded)
    if not isNumber(settings['fps']) or settings['fps'] <= 0:
        raise ConfigError('fps has to be a number above 0')
    if settings['rate'] is not None and (not isNumber(settings['rate']) or settings['rate'] <= 0):
        raise ConfigError('rate has to be null or a number above 0')
    return settings
