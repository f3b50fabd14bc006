"""Convert city-building game language files (text and message files) between ENG and XML."""

__version__ = "0.5.1"
__all__ = ["__version__"]