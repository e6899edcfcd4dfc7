"""
Quality Constants

Quality labels, score tiers and allow-list aliases for streams.
"""

from typing import ClassVar


class QualityScore:
    """Integer rank derived from resolution hints (higher is better)."""

    UHD = 4
    FULL_HD = 3
    HD = 2
    SD = 1
    UNKNOWN = 0


class QualityCategory:
    """Buckets used by the per-quality result cap."""

    UHD = "4k"
    FULL_HD = "1080p"
    HD = "720p"
    SD = "480p"
    OTHER = "other"

    # Output order of the capped buckets
    ORDER: ClassVar[tuple[str, ...]] = (UHD, FULL_HD, HD, SD, OTHER)


class QualityOptions:
    """User-selectable quality allow-list values."""

    ALL: ClassVar[frozenset[str]] = frozenset({"4k", "1080p", "720p", "480p"})

    # Label substrings (lowercase) accepted for each selectable quality
    LABEL_ALIASES: ClassVar[dict[str, tuple[str, ...]]] = {
        "4k": ("4k", "uhd", "2160p", "ultra hd"),
        "1080p": ("1080p",),
        "720p": ("720p",),
        "480p": ("480p", "sd"),
    }


class QualityLabels:
    """Title patterns tried when the release parser finds no resolution.

    Order matters: the first matching pattern wins.
    """

    TITLE_PATTERNS: ClassVar[tuple[tuple[str, str], ...]] = (
        (r"\b720p\b", "720p"),
        (r"\b1080p\b", "1080p"),
        (r"\b2160p\b", "4K/2160p"),
        (r"\b4k\b", "4K"),
        (r"\buhd\b", "4K/UHD"),
        (r"\bhdr\b", "HDR"),
        (r"\bhq\b", "HQ"),
        (r"\bbdrip\b", "BDRip"),
        (r"\bbluray\b", "BluRay"),
        (r"\bweb-?dl\b", "WEB-DL"),
    )

    # (width, height, label) tiers for "WIDTHxHEIGHT" resolution hints
    RESOLUTION_TIERS: ClassVar[tuple[tuple[int, int, str], ...]] = (
        (3840, 2160, "4K/2160p"),
        (1920, 1080, "1080p"),
        (1280, 720, "720p"),
        (640, 480, "480p"),
    )
    TIER_TOLERANCE = 0.9  # cropped encodes (1916x800) still count as the tier


class SizeUnits:
    """Size label units ranked for comparison, and their size in GB."""

    RANK: ClassVar[dict[str, int]] = {"TB": 3, "GB": 2, "MB": 1, "KB": 0}
    IN_GB: ClassVar[dict[str, float]] = {
        "TB": 1024.0,
        "GB": 1.0,
        "MB": 1 / 1024,
        "KB": 1 / 1024**2,
    }
