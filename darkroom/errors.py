"""Exceptions raised by the build."""


class DarkroomError(Exception):
    """Base class for errors that abort a build."""


class TraversalError(DarkroomError):
    """An entry of the images tree could not be read."""


class RenderError(DarkroomError):
    """A page template failed to render."""


class DecodeError(Exception):
    """An image file could not be decoded. Recoverable: the image is skipped."""
