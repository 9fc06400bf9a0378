"""Extractor registry for managing available attendance dialects."""

from ..exceptions import ExtractorNotFoundError
from .base import BaseExtractor
from .punch_format import PunchFormatExtractor
from .summary_format import SummaryFormatExtractor

# Extractor registry - register new dialects here
_EXTRACTOR_REGISTRY: dict[str, type[BaseExtractor]] = {}


def register_extractor(name: str, extractor_class: type[BaseExtractor]) -> None:
    """
    Register a new extractor class.

    Args:
        name: Unique dialect name
        extractor_class: Extractor class to register
    """
    _EXTRACTOR_REGISTRY[name] = extractor_class


def get_extractor(name: str) -> type[BaseExtractor]:
    """
    Get an extractor class by dialect name.

    Args:
        name: Dialect name

    Returns:
        Extractor class

    Raises:
        ExtractorNotFoundError: If the dialect is not registered
    """
    if name not in _EXTRACTOR_REGISTRY:
        available = sorted(_EXTRACTOR_REGISTRY.keys())
        available_display = ", ".join(available) if available else "none"
        raise ExtractorNotFoundError(
            f"Extractor '{name}' is not registered. Available formats: {available_display}."
        )
    return _EXTRACTOR_REGISTRY[name]


def list_extractors() -> list[str]:
    """Return list of registered dialect names."""
    return list(_EXTRACTOR_REGISTRY.keys())


register_extractor("punch", PunchFormatExtractor)
register_extractor("summary", SummaryFormatExtractor)
