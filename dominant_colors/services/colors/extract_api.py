"""
Dominant Colors API Orchestrator

Coordinates the full pipeline for an uploaded image: decoding, scaling to
the working width, PCA partitioning, palette assembly and artifact rendering.
"""

import time
from typing import Any, Dict

from fastapi import UploadFile

from dominant_colors.config import config
from dominant_colors.schemas import DominantColorsResponse
from dominant_colors.services.colors.partition import PartitionResult, find_dominant_colors
from dominant_colors.services.colors.results import class_summary
from dominant_colors.services.colors.swatches import render_palette_strip, rgb_to_hex
from dominant_colors.services.imaging import downscale_to_width, encode_png_b64, read_upload
from dominant_colors.utils.ids import generate_request_id
from dominant_colors.utils.logging import get_logger
from dominant_colors.utils.metrics import get_metrics


async def handle_dominant(file: UploadFile, params: Dict[str, Any]) -> DominantColorsResponse:
    """
    Extract dominant colors from an uploaded image.

    Args:
        file: Uploaded PNG or JPEG image
        params: Dictionary of extraction parameters (count, work_width,
            order, include_artifacts)

    Returns:
        DominantColorsResponse with palette, debug info and optional artifacts

    Raises:
        HTTPException: For unreadable or unsupported uploads
        InvalidColorCount, EmptyImage: For inputs the partitioner rejects
    """
    log = get_logger()
    metrics = get_metrics()
    request_id = generate_request_id("dom")
    start_time = time.time()

    count = params.get('count', config.DEFAULT_COUNT)
    work_width = params.get('work_width', config.WORK_WIDTH)
    order = params.get('order', config.DEFAULT_ORDER)
    include_artifacts = params.get('include_artifacts', config.INCLUDE_ARTIFACTS)

    log.info("Starting dominant color extraction", extra={"request_id": request_id, "count": count})
    metrics.increment_request_count()

    try:
        source = await read_upload(file)
        source_height, source_width = source.shape[:2]
        image = downscale_to_width(source, work_width)
        height, width = image.shape[:2]
        decode_time = time.time() - start_time

        partition_start = time.time()
        result = find_dominant_colors(image, count)
        partition_time = time.time() - partition_start

        log.info(f"Partitioning complete: {len(result.tree.leaves())} colors",
                 extra={"request_id": request_id, "ms_partition": partition_time * 1000})

        palette = [
            {"hex": rgb_to_hex(entry["rgb"]), **entry}
            for entry in class_summary(result.tree, order)
        ]

        render_start = time.time()
        artifacts = _render_artifacts(result, order) if include_artifacts else None
        render_time = time.time() - render_start

        total_time = time.time() - start_time
        timings = {
            "decode": decode_time * 1000,
            "partition": partition_time * 1000,
            "render": render_time * 1000,
            "total": total_time * 1000
        }

        response = DominantColorsResponse(
            request_id=request_id,
            width=width,
            height=height,
            source_width=source_width,
            source_height=source_height,
            count=count,
            palette=palette,
            debug={
                "splits": result.splits,
                "terminal_classes": result.terminal_classes,
                "order": order,
                "work_width": work_width,
                "timings_ms": timings
            },
            artifacts=artifacts
        )

        log.info("Dominant color extraction completed successfully",
                 extra={
                     "request_id": request_id,
                     "dims": f"{width}x{height}",
                     "count": count,
                     "colors": [entry["hex"] for entry in palette],
                     "ms_total": total_time * 1000,
                     "result": "ok"
                 })

        metrics.record_timing("partition", partition_time * 1000)
        metrics.record_timing("request", total_time * 1000)
        metrics.record_split_count(result.splits)

        return response

    except Exception as e:
        error_time = time.time() - start_time
        log.error(f"Dominant color extraction failed: {str(e)}",
                  extra={
                      "request_id": request_id,
                      "ms_total": error_time * 1000,
                      "result": "error",
                      "error_type": type(e).__name__
                  })
        metrics.increment_failure_count(type(e).__name__.lower())
        raise


def _render_artifacts(result: PartitionResult, order: str) -> Dict[str, str]:
    """Render palette strip, quantized image and classification overlay."""
    colors = result.colors(order)
    strip = render_palette_strip(colors, tile_size=config.PALETTE_TILE_SIZE)
    return {
        "palette_png_b64": encode_png_b64(strip),
        "quantized_png_b64": encode_png_b64(result.quantized()),
        "classification_png_b64": encode_png_b64(result.classification())
    }
