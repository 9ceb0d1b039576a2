"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """A required setting is missing or still holds its placeholder value."""

    def __init__(self, setting: str, reason: str = "must be configured"):
        self.setting = setting
        super().__init__(f"{setting} {reason}")
