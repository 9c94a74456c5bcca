"""
Tests for the partitioning driver.

Covers input validation, the class-count and id invariants, and the
black/white, uniform and single-color scenarios.
"""

import numpy as np
import pytest

from dominant_colors.services.colors.errors import EmptyImage, InvalidColorCount
from dominant_colors.services.colors.partition import (
    find_dominant_colors, validate_color_count
)


class TestValidation:
    """Test rejection of unusable inputs"""

    @pytest.mark.parametrize("count", [0, -3, 256, 1000])
    def test_out_of_range_count(self, count, black_white_image):
        with pytest.raises(InvalidColorCount):
            find_dominant_colors(black_white_image, count)

    def test_non_integer_count(self):
        with pytest.raises(InvalidColorCount):
            validate_color_count(2.5)
        with pytest.raises(InvalidColorCount):
            validate_color_count(True)

    def test_invalid_count_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_color_count(0)

    def test_boundaries_accepted(self):
        assert validate_color_count(1) == 1
        assert validate_color_count(255) == 255
        assert validate_color_count(np.int64(7)) == 7

    @pytest.mark.parametrize("shape", [(0, 5, 3), (5, 0, 3), (0, 0, 3)])
    def test_empty_image(self, shape):
        with pytest.raises(EmptyImage):
            find_dominant_colors(np.zeros(shape, dtype=np.uint8), 2)

    def test_wrong_channel_count(self):
        with pytest.raises(ValueError):
            find_dominant_colors(np.zeros((4, 4), dtype=np.uint8), 2)


class TestSingleColor:
    """count=1 performs no splits"""

    def test_count_one_returns_image_average(self, noisy_image):
        result = find_dominant_colors(noisy_image, 1)

        assert result.splits == 0
        assert len(result.tree) == 1
        leaves = result.tree.leaves()
        assert len(leaves) == 1

        expected = noisy_image.reshape(-1, 3).mean(axis=0)
        np.testing.assert_allclose(leaves[0].mean * 255.0, expected, rtol=1e-9)
        assert np.all(np.abs(result.colors()[0].astype(float) - expected) <= 0.5 + 1e-6)
        assert np.all(result.labels == 1)


class TestScenarios:
    """Concrete images with known answers"""

    def test_black_and_white(self, black_white_image):
        result = find_dominant_colors(black_white_image, 2)

        colors = {tuple(c) for c in result.colors().tolist()}
        assert colors == {(0, 0, 0), (255, 255, 255)}

        labels = result.labels
        assert labels[0, 0] == labels[0, 1]
        assert labels[1, 0] == labels[1, 1]
        assert labels[0, 0] != labels[1, 0]

    def test_uniform_image_does_not_crash(self, uniform_image):
        result = find_dominant_colors(uniform_image, 3)

        colors = result.colors()
        assert len(colors) >= 1
        for color in colors.tolist():
            assert tuple(color) == (120, 80, 160)
        assert result.splits == 0
        assert result.terminal_classes == [1]

    def test_four_blocks_recovered(self, four_block_image):
        result = find_dominant_colors(four_block_image, 4)

        found = {tuple(c) for c in result.colors().tolist()}
        assert found == {(220, 30, 30), (30, 200, 40), (20, 40, 210), (240, 230, 60)}

    def test_more_colors_than_exist_stops_early(self, four_block_image):
        result = find_dominant_colors(four_block_image, 10)

        assert result.splits == 3
        assert len(result.tree.leaves()) == 4
        assert len(result.terminal_classes) == 4


class TestInvariants:
    """Properties that hold for any image with enough distinct colors"""

    @pytest.mark.parametrize("count", [1, 2, 3, 5, 8, 16])
    def test_exact_class_count(self, noisy_image, count):
        result = find_dominant_colors(noisy_image, count)

        assert len(result.colors()) == count
        assert len(np.unique(result.labels)) == count
        assert result.splits == count - 1
        assert len(result.tree.leaves()) == result.splits + 1

    def test_labels_are_leaf_ids(self, noisy_image):
        result = find_dominant_colors(noisy_image, 6)
        leaf_ids = {leaf.classid for leaf in result.tree.leaves()}
        assert set(np.unique(result.labels).tolist()) == leaf_ids

    def test_ids_unique_and_increasing(self, noisy_image):
        result = find_dominant_colors(noisy_image, 12)
        ids = [node.classid for node in result.tree.nodes]
        assert len(ids) == len(set(ids))
        assert ids == sorted(ids)
        assert ids[0] == 1

    def test_ids_beyond_one_byte(self):
        rng = np.random.default_rng(7)
        image = rng.integers(0, 256, size=(40, 40, 3), dtype=np.uint8)
        result = find_dominant_colors(image, 200)

        assert len(result.tree.leaves()) == 200
        assert max(node.classid for node in result.tree.nodes) > 255
        compact = result.compact_labels()
        assert compact.dtype == np.uint8
        assert len(np.unique(compact)) == 200

    def test_leaf_pixel_counts_cover_image(self, noisy_image):
        result = find_dominant_colors(noisy_image, 7)
        total = sum(leaf.pixel_count for leaf in result.tree.leaves())
        assert total == noisy_image.shape[0] * noisy_image.shape[1]

    def test_deterministic(self, noisy_image):
        first = find_dominant_colors(noisy_image, 9)
        second = find_dominant_colors(noisy_image, 9)
        np.testing.assert_array_equal(first.labels, second.labels)
        np.testing.assert_array_equal(first.colors(), second.colors())

    def test_input_not_modified(self, noisy_image):
        before = noisy_image.copy()
        find_dominant_colors(noisy_image, 4)
        np.testing.assert_array_equal(noisy_image, before)
