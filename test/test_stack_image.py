"""Tests for the synthetic stack generator."""

import unittest

import numpy as np

from blockstack.utils.stack_image import create_test_image, draw_stack, frame_size, max_stack_rows

from helpers import RED, TUNING, blank_frame


class TestStackImage(unittest.TestCase):
    def test_max_stack_rows(self) -> None:
        rows = frame_size(TUNING)[0]
        # 640 rows, 51 px blocks resting one block above the bottom edge
        self.assertEqual(max_stack_rows(rows, TUNING), 11)
        self.assertEqual(max_stack_rows(TUNING.block_height_px, TUNING), 0)

    def test_tallest_stack_fits(self) -> None:
        frame = blank_frame()
        n = max_stack_rows(frame.shape[0], TUNING)
        draw_stack(frame, [(RED, 1)] * n, TUNING)
        top = frame.shape[0] - TUNING.block_height_px * (n + 1)
        self.assertGreaterEqual(top, 0)
        self.assertTrue(np.any(frame[top]))
        self.assertFalse(np.any(frame[:top]))

    def test_too_many_blocks(self) -> None:
        frame = blank_frame()
        n = max_stack_rows(frame.shape[0], TUNING) + 1
        with self.assertRaises(ValueError):
            draw_stack(frame, [(RED, 1)] * n, TUNING)
        self.assertFalse(np.any(frame))
        with self.assertRaises(ValueError):
            create_test_image(20, TUNING, rng=np.random.default_rng(0))

    def test_ground_truth_length(self) -> None:
        image, truth = create_test_image(4, TUNING, rng=np.random.default_rng(1), noise=False)
        self.assertEqual(image.shape, (*frame_size(TUNING), 3))
        self.assertEqual(len(truth), 4)


if __name__ == "__main__":
    unittest.main()
