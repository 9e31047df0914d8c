"""Simple wrappers for the few failure states the exporter distinguishes between"""


class ModemNotOkError(Exception):
    """Exception for non-200/OK responses from modem."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message, status_code, payload)
        self.status_code = status_code


class ConfigError(Exception):
    """Exception for missing/invalid configuration at startup. Always fatal."""
