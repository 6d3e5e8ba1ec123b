from importlib import metadata

from propertyiq import __version__ as _fallback_version

try:
    __version__ = metadata.version("propertyiq")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = _fallback_version
