from __future__ import annotations


class ParcoordsError(Exception):
    """Base class for parcoords failures."""


class DataLoadError(ParcoordsError):
    """Raised when the input table cannot be read. Fatal to the session."""


class ParcoordsConfigError(ParcoordsError):
    """Raised for invalid dimension or column-type configuration."""
