# ========================
# file: wbox_engine/core/errors.py
# ========================
class ConverterError(Exception):
    """Base error for the image-to-map converter."""


class ConfigError(ConverterError):
    """Base error for converter configuration."""


class ConfigValidationError(ConfigError):
    """Raised when a configuration fails validation."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file does not exist."""


class ImageLoadError(ConverterError):
    """Raised when the source image cannot be read or decoded."""


class ImageSizeError(ConverterError):
    """Raised when the source image is smaller than one map tile."""


class CatalogError(ConverterError):
    """Raised when the tile catalog is inconsistent (e.g. unresolved shared colors)."""


class MapSerializationError(ConverterError):
    """Raised when a map record cannot be represented in the save format."""
