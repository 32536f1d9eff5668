"""
Exceptions
==========

Error taxonomy shared by the template loader and the render engines.
"""


class ConversionError(Exception):
    """Base exception for HTML conversion failures."""

    pass


class ReadError(ConversionError):
    """Exception raised when the HTML source cannot be read or decoded."""

    pass


class RenderError(ConversionError):
    """Exception raised when the render engine fails to produce an artifact."""

    pass
