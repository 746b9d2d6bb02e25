"""Exceptions raised by the carving session and its decoder."""


class SeamCarveError(Exception):
    """Base class for all seamcarve errors."""


class LoadError(SeamCarveError):
    """An image could not be loaded. Prior session state is untouched."""


class DecodeError(LoadError):
    """The file is malformed or in an unsupported format."""


class TooSmallError(LoadError):
    """The image has a dimension of 1 pixel or less."""


class TooLargeError(LoadError):
    """The image has more pixels than the configured limit."""


class InvalidCarveRequest(SeamCarveError, ValueError):
    """A carve target is non-positive, or no image is loaded."""


class SaveError(SeamCarveError):
    """The carved image could not be written."""
