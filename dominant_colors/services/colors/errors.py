"""
Dominant Colors Error Types

Conditions detected by the partitioning pipeline. Input validation errors
derive from ValueError so callers that only know about ValueError still
catch them.
"""


class DominantColorsError(Exception):
    """Base class for dominant color extraction failures."""
    pass


class InvalidColorCount(DominantColorsError, ValueError):
    """Requested color count is outside the single-byte class id range."""

    def __init__(self, count, min_count: int = 1, max_count: int = 255):
        self.count = count
        super().__init__(
            f"The color count needs to be between {min_count}-{max_count}. You picked: {count}"
        )


class EmptyImage(DominantColorsError, ValueError):
    """Image has zero width or height, so there are no pixels to analyze."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"Image has no pixels: {width}×{height}")


class DegenerateSplit(DominantColorsError, RuntimeError):
    """Splitting a class would leave one of its children without pixels."""

    def __init__(self, classid: int, left_count: int, right_count: int):
        self.classid = classid
        self.left_count = left_count
        self.right_count = right_count
        super().__init__(
            f"Class {classid} cannot be split: "
            f"left={left_count} pixels, right={right_count} pixels"
        )
