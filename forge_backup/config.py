import os

from .errors import ConfigError


class Config:
    """External utilities used by the backup stages."""

    MYSQLDUMP_BIN = os.environ.get("FORGE_MYSQLDUMP_BIN") or "mysqldump"
    GZIP_BIN = os.environ.get("FORGE_GZIP_BIN") or "gzip"
    TAR_BIN = os.environ.get("FORGE_TAR_BIN") or "tar"

    # 1 (fastest) .. 9 (best)
    GZIP_LEVEL = os.environ.get("FORGE_GZIP_LEVEL") or "9"

    @classmethod
    def gzip_level(cls) -> int:
        try:
            level = int(cls.GZIP_LEVEL)
        except (TypeError, ValueError):
            raise ConfigError(
                f"FORGE_GZIP_LEVEL must be an integer, got '{cls.GZIP_LEVEL}'"
            ) from None
        if not 1 <= level <= 9:
            raise ConfigError(
                f"FORGE_GZIP_LEVEL must be between 1 and 9, got {level}"
            )

        return level
