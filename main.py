from dotenv import load_dotenv
from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables before the config module reads them
load_dotenv()

from dominant_colors import __version__
from dominant_colors.config import config
from dominant_colors.schemas import DominantColorsResponse, HealthResponse, MetricsResponse
from dominant_colors.services.colors.errors import EmptyImage, InvalidColorCount
from dominant_colors.services.colors.extract_api import handle_dominant
from dominant_colors.utils.logging import get_logger
from dominant_colors.utils.metrics import get_metrics

get_logger()

app = FastAPI(
    title="Dominant Colors",
    description="PCA-based dominant color extraction and image posterization",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in config.ALLOWED_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Service health check."""
    return HealthResponse(
        ok=True,
        version=__version__,
        service="dominant-colors"
    )


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Dominant Colors API",
        "version": __version__,
        "docs": "/docs"
    }


@app.post("/colors/dominant", response_model=DominantColorsResponse)
async def dominant_colors(
    file: UploadFile = File(..., description="JPG or PNG image"),
    count: int = Query(config.DEFAULT_COUNT, ge=config.MIN_COUNT, le=config.MAX_COUNT,
                       description="Number of dominant colors to extract"),
    work_width: int = Query(config.WORK_WIDTH, ge=0, le=config.MAX_WORK_WIDTH,
                            description="Shrink the image to this width first (0 = keep)"),
    order: str = Query(config.DEFAULT_ORDER, pattern="^(tree|prominence)$",
                       description="Palette order: tree discovery order or by pixel count"),
    include_artifacts: bool = Query(config.INCLUDE_ARTIFACTS,
                                    description="Include palette, quantized and classification PNGs")
):
    """
    Extract the dominant colors of an uploaded image.

    - **file**: JPG or PNG image
    - **count**: Number of colors (1-255)
    - **work_width**: Working width in pixels; larger images are shrunk first
    - **order**: `tree` (class discovery order) or `prominence` (largest class first)
    - **include_artifacts**: Return base64 PNG renderings of the result

    The image is partitioned by repeatedly splitting the color class with
    the largest variance along its principal axis.
    """
    params = {
        'count': count,
        'work_width': work_width,
        'order': order,
        'include_artifacts': include_artifacts
    }

    try:
        return await handle_dominant(file=file, params=params)
    except (InvalidColorCount, EmptyImage) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/metrics", response_model=MetricsResponse)
def metrics_summary():
    """In-process request metrics."""
    return get_metrics().get_summary()
