"""Exceptions raised by fontbytes."""


class FontBytesError(Exception):
    """Base class for every error raised by this package."""


class FontDataError(FontBytesError, ValueError):
    """Glyph or face data is inconsistent (bad size, wrong pixel count...)."""


class GeneratorError(FontBytesError, ValueError):
    """Source code cannot be generated for the given face and options."""


class UnknownFormatError(FontBytesError, KeyError):
    """No output format is registered under the requested identifier."""

    def __str__(self):
        return f"unknown output format: {self.args[0]!r}"


class FontImportError(FontBytesError):
    """A font file or font sheet could not be turned into a face."""
