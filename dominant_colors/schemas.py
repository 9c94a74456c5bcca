"""
Dominant Colors API Schemas
Pydantic models for dominant color extraction request/response validation.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("dominant-colors", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


class DominantColorEntry(BaseModel):
    """One dominant color: the mean of a final color class."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color code in format #RRGGBB"
    )
    rgb: List[int] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Channel values 0-255 in the decoded image's channel order"
    )
    class_id: int = Field(..., ge=1, description="Id of the color class in the partition tree")
    pixel_count: int = Field(..., ge=1, description="Pixels assigned to this class")
    ratio: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Share of the working image covered by this class"
    )


class DominantColorsDebug(BaseModel):
    """Debug information for a partitioning run."""
    splits: int = Field(..., ge=0, description="Number of class splits performed")
    terminal_classes: List[int] = Field(
        default_factory=list,
        description="Class ids that could not be split further"
    )
    order: str = Field(..., description="Palette ordering: 'tree' or 'prominence'")
    work_width: int = Field(..., description="Working width used (0 = source resolution)")
    timings_ms: Dict[str, float] = Field(
        default_factory=dict,
        description="Stage durations: decode, partition, render, total"
    )


class DominantColorsArtifacts(BaseModel):
    """Rendered outputs, each a base64-encoded PNG."""
    palette_png_b64: str = Field(..., description="Strip of square tiles, one per color")
    quantized_png_b64: str = Field(..., description="Working image with every pixel set to its class color")
    classification_png_b64: str = Field(..., description="False-color map of the color classes")


class DominantColorsResponse(BaseModel):
    """Main dominant colors response."""
    request_id: str = Field(..., description="Request identifier for tracing")
    width: int = Field(..., description="Working image width in pixels")
    height: int = Field(..., description="Working image height in pixels")
    source_width: int = Field(..., description="Uploaded image width in pixels")
    source_height: int = Field(..., description="Uploaded image height in pixels")
    count: int = Field(..., ge=1, le=255, description="Number of colors requested")
    palette: List[DominantColorEntry] = Field(
        ...,
        description="Dominant colors, one per final class"
    )
    debug: DominantColorsDebug = Field(..., description="Debug information and parameters")
    artifacts: Optional[DominantColorsArtifacts] = Field(
        None,
        description="Optional rendered images"
    )


class MetricsResponse(BaseModel):
    """In-process metrics summary."""
    uptime_seconds: float
    counters: Dict[str, int]
    timing_stats: Dict[str, Dict[str, float]]
    split_stats: Dict[str, Any]
