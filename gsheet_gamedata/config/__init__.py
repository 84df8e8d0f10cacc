from .settings import (
    ApplicationSettings,
    GoogleSheetsSettings,
    OutputSettings,
    get_settings,
    reload_settings,
)

__all__ = [
    "ApplicationSettings",
    "GoogleSheetsSettings",
    "OutputSettings",
    "get_settings",
    "reload_settings",
]
