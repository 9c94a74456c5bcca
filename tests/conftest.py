"""
Test configuration and fixtures for dominant color extraction tests.
"""
import numpy as np
import pytest
from fastapi.testclient import TestClient

# Import the main app
from main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from dominant_colors.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def black_white_image():
    """2×2 image: top row black, bottom row white."""
    return np.array([
        [(0, 0, 0), (0, 0, 0)],
        [(255, 255, 255), (255, 255, 255)],
    ], dtype=np.uint8)


@pytest.fixture
def uniform_image():
    """8×6 image of a single color."""
    return np.full((6, 8, 3), (120, 80, 160), dtype=np.uint8)


@pytest.fixture
def four_block_image():
    """40×40 image made of four solid quadrants with distinct colors."""
    img = np.zeros((40, 40, 3), dtype=np.uint8)
    img[:20, :20] = (220, 30, 30)     # red
    img[:20, 20:] = (30, 200, 40)     # green
    img[20:, :20] = (20, 40, 210)     # blue
    img[20:, 20:] = (240, 230, 60)    # yellow
    return img


@pytest.fixture
def noisy_image():
    """Deterministic random image with many distinct colors."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(24, 32, 3), dtype=np.uint8)
