import unittest

import numpy as np

from floatcore.domain import IdCounter, IndexOutOfRangeError, RankMismatchError
from floatcore.infrastructure.tensor import FloatTensor
from floatcore.infrastructure.tensor._strided import (
    flat_offset,
    row_major_strides,
    shape_product,
    validate_shape,
)


class TestStridedHelpers(unittest.TestCase):
    def test_validate_shape_normalizes_to_int_tuple(self) -> None:
        self.assertEqual(validate_shape([2, np.int64(3)]), (2, 3))

    def test_row_major_strides(self) -> None:
        self.assertEqual(row_major_strides((5,)), (1,))
        self.assertEqual(row_major_strides((2, 3, 4)), (12, 4, 1))
        self.assertEqual(row_major_strides((3, 0, 2)), (0, 2, 1))

    def test_shape_product(self) -> None:
        self.assertEqual(shape_product((2, 3, 4)), 24)
        self.assertEqual(shape_product((2, 0)), 0)

    def test_flat_offset_matches_numpy_ravel(self) -> None:
        shape = (2, 3, 4)
        strides = row_major_strides(shape)
        for idx in np.ndindex(*shape):
            with self.subTest(idx=idx):
                self.assertEqual(
                    flat_offset(idx, shape, strides), np.ravel_multi_index(idx, shape)
                )


class TestTensorIndexing(unittest.TestCase):
    def setUp(self) -> None:
        self.counter = IdCounter()

    def test_read_via_stride_formula(self) -> None:
        t = FloatTensor((2, 3), [1, 2, 3, 4, 5, 6], counter=self.counter)
        self.assertEqual(t[1, 2], 6.0)
        self.assertEqual(t[0, 1], 2.0)
        self.assertIsInstance(t[0, 0], float)

    def test_rank_one_accepts_bare_int(self) -> None:
        t = FloatTensor((3,), [7, 8, 9], counter=self.counter)
        self.assertEqual(t[2], 9.0)
        self.assertEqual(t[(1,)], 8.0)

    def test_write_then_read(self) -> None:
        t = FloatTensor((2, 2, 2), counter=self.counter)
        t[1, 0, 1] = 3.25
        self.assertEqual(t[1, 0, 1], 3.25)
        self.assertEqual(t.to_numpy()[1, 0, 1], np.float32(3.25))
        self.assertEqual(float(t.to_numpy().sum()), 3.25)

    def test_write_rounds_to_float32(self) -> None:
        t = FloatTensor((1,), counter=self.counter)
        t[0] = 0.1
        self.assertEqual(t[0], float(np.float32(0.1)))

    def test_out_of_range_per_dimension(self) -> None:
        t = FloatTensor((2, 3), counter=self.counter)
        for idx, dim in (((2, 0), 0), ((0, 3), 1), ((5, 5), 0)):
            with self.subTest(idx=idx):
                with self.assertRaises(IndexOutOfRangeError) as ctx:
                    t[idx]
                self.assertEqual(ctx.exception.dim, dim)
                self.assertIsInstance(ctx.exception, IndexError)

    def test_negative_indices_rejected(self) -> None:
        t = FloatTensor((2, 3), counter=self.counter)
        with self.assertRaises(IndexOutOfRangeError):
            t[-1, 0]
        with self.assertRaises(IndexOutOfRangeError):
            t[0, -1] = 1.0

    def test_rank_mismatch(self) -> None:
        t = FloatTensor((2, 3), counter=self.counter)
        with self.assertRaises(RankMismatchError):
            t[1]
        with self.assertRaises(RankMismatchError):
            t[0, 0, 0] = 1.0

    def test_non_integer_index_rejected(self) -> None:
        t = FloatTensor((2,), counter=self.counter)
        with self.assertRaises(TypeError):
            t[0.5]
        with self.assertRaises(TypeError):
            t[True]

    def test_failed_write_leaves_data_unchanged(self) -> None:
        t = FloatTensor((2,), [1, 2], counter=self.counter)
        with self.assertRaises(IndexOutOfRangeError):
            t[2] = 9.0
        self.assertEqual(t.tolist(), [1.0, 2.0])


if __name__ == "__main__":
    unittest.main()
