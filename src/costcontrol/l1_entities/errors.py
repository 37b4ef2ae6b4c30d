"""Domain error types."""


class UnknownSettingError(KeyError):
    """Raised when a setting name is not part of the settings schema."""


class SettingsDecodeError(ValueError):
    """Raised when a stored settings blob cannot be decoded."""
