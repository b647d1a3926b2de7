class GridRushError(Exception):
    """Base exception for the Grid Rush project."""


class FieldFullError(GridRushError):
    """Raised when a spawn is requested but no interior cell is empty."""


class SettingsError(GridRushError):
    """Raised when a settings file cannot be parsed into valid settings."""
