"""Errors raised by the consumables catalogue and its JSON codec."""


class CatalogueError(Exception):
    """Base class for every catalogue failure."""


class BadTypeError(CatalogueError, ValueError):
    """Raised when an item is built with a type other than FOOD or DRINK."""


class ParseError(CatalogueError, ValueError):
    """Raised when JSON is malformed or an item field is missing or of the wrong kind."""


class ReadError(CatalogueError, OSError):
    """Raised when an existing database file cannot be read."""


class WriteError(CatalogueError, OSError):
    """Raised when the database file cannot be written."""


class OutOfRangeError(CatalogueError, IndexError):
    """Raised on positional access past the end of the catalogue."""
