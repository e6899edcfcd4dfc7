"""Title alias sources used by the variant generator."""

from .custom_titles import (
    CustomTitleDictionary,
    load_custom_titles,
    parse_custom_titles,
)
from .provider_alternates import ProviderAlternates

__all__ = [
    "CustomTitleDictionary",
    "ProviderAlternates",
    "load_custom_titles",
    "parse_custom_titles",
]
