"""Git lifecycle hook runner with secret scanning and quality checks."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("hookguard")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

__all__ = ["__version__"]
