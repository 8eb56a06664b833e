import unittest

import numpy as np

from floatcore.domain import IdCounter, ShapeMismatchError
from floatcore.infrastructure.tensor import FloatTensor


class TestAddMatrixMultiplyHost(unittest.TestCase):
    def setUp(self) -> None:
        self.counter = IdCounter()
        self.rng = np.random.default_rng(0)

    def make(self, arr) -> FloatTensor:
        return FloatTensor.from_numpy(arr, counter=self.counter)

    def test_accumulates_product(self) -> None:
        a_np = self.rng.standard_normal((3, 4)).astype(np.float32)
        b_np = self.rng.standard_normal((4, 2)).astype(np.float32)
        c_np = self.rng.standard_normal((3, 2)).astype(np.float32)

        c = self.make(c_np)
        c.add_matrix_multiply_(self.make(a_np), self.make(b_np))
        np.testing.assert_allclose(c.to_numpy(), c_np + a_np @ b_np, rtol=1e-5, atol=1e-6)

    def test_accumulates_across_calls(self) -> None:
        a = self.make(np.eye(2, dtype=np.float32))
        b = self.make(np.array([[1, 2], [3, 4]], dtype=np.float32))
        c = FloatTensor((2, 2), counter=self.counter)
        c.add_matrix_multiply_(a, b)
        c.add_matrix_multiply_(a, b)
        self.assertEqual(c.tolist(), [[2.0, 4.0], [6.0, 8.0]])

    def test_receiver_as_operand(self) -> None:
        c_np = np.array([[1, 2], [3, 4]], dtype=np.float32)
        c = self.make(c_np)
        c.add_matrix_multiply_(c, c)
        np.testing.assert_array_equal(c.to_numpy(), c_np + c_np @ c_np)

    def test_shape_errors(self) -> None:
        c = FloatTensor((2, 2), counter=self.counter)
        cases = [
            (FloatTensor((2, 3), counter=self.counter), FloatTensor((2, 2), counter=self.counter)),
            (FloatTensor((2, 3), counter=self.counter), FloatTensor((3, 3), counter=self.counter)),
            (FloatTensor((4,), counter=self.counter), FloatTensor((2, 2), counter=self.counter)),
        ]
        for a, b in cases:
            with self.subTest(a=a.shape, b=b.shape):
                with self.assertRaises(ShapeMismatchError):
                    c.add_matrix_multiply_(a, b)
        self.assertEqual(c.tolist(), [[0.0, 0.0], [0.0, 0.0]])

    def test_non_tensor_operand_rejected(self) -> None:
        c = FloatTensor((1, 1), counter=self.counter)
        with self.assertRaises(TypeError):
            c.add_matrix_multiply_(np.ones((1, 1)), FloatTensor((1, 1), counter=self.counter))


if __name__ == "__main__":
    unittest.main()
