"""
Dominant Colors Imaging Utilities
Handles image decoding, upload validation, working-resolution scaling and PNG encoding.
All arrays are RGB; conversion to BGR happens only at the OpenCV encoding boundary.
"""
import base64
import io
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from fastapi import HTTPException, UploadFile
from loguru import logger
from PIL import Image

from dominant_colors.config import config


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file for size and format compliance.

    Args:
        file: FastAPI UploadFile object

    Raises:
        HTTPException: 400 for oversized files, 415 for unsupported formats
    """
    if hasattr(file, 'size') and file.size and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename:
        ext = file.filename.lower().split('.')[-1] if '.' in file.filename else ''
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Returns:
        Detected MIME type

    Raises:
        ValueError: For truncated files or unsupported formats
    """
    if len(file_bytes) < 8:
        raise ValueError("File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    else:
        raise ValueError("Invalid image file. Magic bytes don't match supported formats.")


def decode_image_bytes(file_bytes: bytes) -> np.ndarray:
    """
    Decode PNG/JPEG bytes into an RGB uint8 array.

    Raises:
        ValueError: If the bytes are not a decodable image
    """
    validate_magic_bytes(file_bytes)
    try:
        pil_image = Image.open(io.BytesIO(file_bytes))
        if pil_image.mode != 'RGB':
            pil_image = pil_image.convert('RGB')
        return np.array(pil_image)
    except Exception as e:
        raise ValueError(f"Failed to decode image: {str(e)}") from e


def load_image(path: Union[str, Path]) -> np.ndarray:
    """
    Read an image file from disk into an RGB uint8 array.

    Raises:
        ValueError: If the file is missing or cannot be decoded
    """
    path = Path(path)
    try:
        file_bytes = path.read_bytes()
    except OSError as e:
        raise ValueError(f"Unable to open the file: {path}") from e
    return decode_image_bytes(file_bytes)


async def read_upload(file: UploadFile) -> np.ndarray:
    """
    Safely read and decode an uploaded image to an RGB array.

    Raises:
        HTTPException: 400 for read/decode errors or oversized payloads
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    try:
        return decode_image_bytes(file_bytes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def downscale_to_width(image: np.ndarray, width: Optional[int] = None) -> np.ndarray:
    """
    Shrink an image to the working width, keeping its aspect ratio.

    Images already narrower than the target are returned unchanged; a width
    of 0 or None disables scaling.
    """
    if width is None:
        width = config.WORK_WIDTH
    if not width:
        return image

    height, current_width = image.shape[:2]
    if current_width <= width:
        return image

    scale = width / current_width
    new_height = max(1, int(round(height * scale)))

    # INTER_AREA for downscaling
    resized = cv2.resize(image, (width, new_height), interpolation=cv2.INTER_AREA)
    logger.debug(f"Scaled image {current_width}×{height} -> {width}×{new_height}")
    return resized


def encode_png(image_rgb: np.ndarray) -> bytes:
    """Encode an RGB uint8 array as PNG bytes."""
    bgr = cv2.cvtColor(np.ascontiguousarray(image_rgb, dtype=np.uint8), cv2.COLOR_RGB2BGR)
    success, buffer = cv2.imencode('.png', bgr)
    if not success:
        raise RuntimeError("Failed to encode image as PNG")
    return buffer.tobytes()


def encode_png_b64(image_rgb: np.ndarray) -> str:
    """Encode an RGB uint8 array as a base64 PNG string."""
    return base64.b64encode(encode_png(image_rgb)).decode('ascii')


def write_png(path: Union[str, Path], image_rgb: np.ndarray) -> Path:
    """Write an RGB uint8 array to a PNG file."""
    path = Path(path)
    path.write_bytes(encode_png(image_rgb))
    logger.debug(f"Wrote {path}")
    return path
