"""Exceptions raised at the edges of draft2html.

The converter itself never raises on malformed content; these are for
reading input documents, style maps and files.
"""


class Draft2HtmlError(Exception):
    """Base class for all draft2html errors."""


class ContentStateError(Draft2HtmlError):
    """The input document could not be read or is not a content state."""


class ConfigError(Draft2HtmlError):
    """A style map or conversion option is invalid."""


class ConversionError(Draft2HtmlError):
    """A file conversion was requested without anything to convert."""
