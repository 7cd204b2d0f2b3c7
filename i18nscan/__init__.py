"""Static i18n scanner for parsed JavaScript/TypeScript syntax trees."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("i18nscan")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = ["__version__"]
