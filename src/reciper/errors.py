"""Exceptions raised by reciper."""


class ReciperError(Exception):
    """Base class for reciper errors."""


class DecodeError(ReciperError):
    """A persisted recipe document could not be decoded."""


class EncodeError(ReciperError):
    """The recipe collection could not be serialized."""


class StorageError(ReciperError):
    """The key-value namespace could not be read or written."""
