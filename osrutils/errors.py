class ReplayError(Exception):
    pass

class TruncatedError(ReplayError, EOFError):
    """The replay ended in the middle of a field."""
    def __init__(self, field, offset, needed):
        self.field = field
        self.offset = offset
        super().__init__(f'{field}: needed {needed} bytes at offset {offset}, replay ended')

class FormatError(ReplayError, ValueError):
    """Bytes were there but don't make sense for the field."""
    def __init__(self, field, message):
        self.field = field
        super().__init__(f'{field}: {message}')

class ConfigError(ValueError):
    pass
