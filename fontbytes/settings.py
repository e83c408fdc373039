"""
Persisted source code options.

Settings live in an INI file:

    [source_code_options]
    bit_numbering = msb
    invert_bits = false
    include_line_spacing = false
    format = arduino

Missing keys fall back to LSB, no inversion, no line spacing and the
first registered format.
"""

from __future__ import annotations

import configparser
import dataclasses
from pathlib import Path

from .formats import DEFAULT_FORMAT, FORMATS
from .generator import SourceCodeOptions
from .packer import BitNumbering

SECTION = "source_code_options"

BIT_NUMBERING = "bit_numbering"
INVERT_BITS = "invert_bits"
INCLUDE_LINE_SPACING = "include_line_spacing"
FORMAT = "format"


class Settings:
    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else None
        self._config = configparser.ConfigParser()
        self._config.add_section(SECTION)

    @classmethod
    def load(cls, path: Path | str) -> Settings:
        """Read settings from ``path``; a missing file gives the defaults."""
        settings = cls(path)
        settings._config.read(settings.path, encoding="utf-8")
        if not settings._config.has_section(SECTION):
            settings._config.add_section(SECTION)
        return settings

    @property
    def _section(self) -> configparser.SectionProxy:
        return self._config[SECTION]

    @property
    def bit_numbering(self) -> BitNumbering:
        value = self._section.get(BIT_NUMBERING, BitNumbering.LSB.value)
        try:
            return BitNumbering(value.lower())
        except ValueError:
            return BitNumbering.LSB

    @property
    def invert_bits(self) -> bool:
        return self._getboolean(INVERT_BITS)

    @property
    def include_line_spacing(self) -> bool:
        return self._getboolean(INCLUDE_LINE_SPACING)

    @property
    def format(self) -> str:
        value = self._section.get(FORMAT, DEFAULT_FORMAT.identifier)
        if value not in {f.identifier for f in FORMATS}:
            return DEFAULT_FORMAT.identifier
        return value

    def _getboolean(self, key: str) -> bool:
        try:
            return self._section.getboolean(key, fallback=False)
        except ValueError:
            return False

    def options(self, base: SourceCodeOptions = SourceCodeOptions()) -> SourceCodeOptions:
        """``base`` with the persisted options applied."""
        return dataclasses.replace(
            base,
            bit_numbering=self.bit_numbering,
            invert_bits=self.invert_bits,
            include_line_spacing=self.include_line_spacing,
        )

    def update_from(self, options: SourceCodeOptions, format_id: str | None = None) -> None:
        section = self._section
        section[BIT_NUMBERING] = options.bit_numbering.value
        section[INVERT_BITS] = str(options.invert_bits).lower()
        section[INCLUDE_LINE_SPACING] = str(options.include_line_spacing).lower()
        if format_id is not None:
            section[FORMAT] = format_id

    def save(self, path: Path | str | None = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("no settings file to save to")
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as f:
            self._config.write(f)
        return target
