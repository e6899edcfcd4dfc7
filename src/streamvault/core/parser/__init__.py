"""Release name parsing."""

from .release_parser import ParsedRelease, parse_release

__all__ = ["ParsedRelease", "parse_release"]
