"""
Dominant Colors Configuration
Manages environment variables and defaults for the extraction service and CLI.
"""
import os
from typing import Literal


class Config:
    """Configuration class for the dominant colors service."""

    # File size limits
    MAX_FILE_MB: int = int(os.environ.get("DOMCOLORS_MAX_FILE_MB", "10"))

    # Working resolution: images are shrunk to this width before partitioning (0 disables)
    WORK_WIDTH: int = int(os.environ.get("DOMCOLORS_WORK_WIDTH", "240"))
    MAX_WORK_WIDTH: int = 4096

    # Partitioning defaults
    DEFAULT_COUNT: int = int(os.environ.get("DOMCOLORS_DEFAULT_COUNT", "5"))
    MIN_COUNT: int = 1
    MAX_COUNT: int = 255  # compact labels are single-byte
    DEFAULT_ORDER: Literal["tree", "prominence"] = os.environ.get("DOMCOLORS_DEFAULT_ORDER", "tree")

    # Artifacts
    PALETTE_TILE_SIZE: int = int(os.environ.get("DOMCOLORS_PALETTE_TILE_SIZE", "64"))
    INCLUDE_ARTIFACTS: bool = bool(int(os.environ.get("DOMCOLORS_INCLUDE_ARTIFACTS", "1")))

    # Logging
    LOG_LEVEL: str = os.environ.get("DOMCOLORS_LOG_LEVEL", "INFO")

    # CORS settings (comma separated)
    ALLOWED_ORIGINS: str = os.environ.get("DOMCOLORS_ALLOWED_ORIGINS", "http://localhost:3000")

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png"}

    @classmethod
    def validate_work_width(cls, width: int) -> bool:
        """Validate working width (0 keeps the source resolution)."""
        return 0 <= width <= cls.MAX_WORK_WIDTH


# Global config instance
config = Config()
