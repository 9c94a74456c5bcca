"""
Dominant Colors

Extracts the dominant colors of an image by recursively splitting its
pixels along the principal axis of color variance.
"""

__version__ = "1.0.0"
