import unittest

import numpy as np

from floatcore.domain import IdCounter
from floatcore.infrastructure.tensor import FloatTensor
from floatcore.infrastructure.tensor._printing import (
    TRUNCATION_NOTICE,
    format_tensor,
    format_value,
)


class TestFormatValue(unittest.TestCase):
    def test_shortest_float32_representation(self) -> None:
        self.assertEqual(format_value(2.0), "2")
        self.assertEqual(format_value(-0.5), "-0.5")
        self.assertEqual(format_value(0.1), "0.1")
        self.assertEqual(format_value(np.float32(1.25)), "1.25")


class TestRenderHost(unittest.TestCase):
    def setUp(self) -> None:
        self.counter = IdCounter()

    def test_rank_one(self) -> None:
        t = FloatTensor((3,), [1, 2.5, -3], counter=self.counter)
        self.assertEqual(t.render(), "1,\t2.5,\t-3,\t\n\n")

    def test_rank_two_rows(self) -> None:
        t = FloatTensor((2, 3), [1, 2, 3, 4, 5, 6], counter=self.counter)
        self.assertEqual(t.render(), "1,\t2,\t3,\t\n4,\t5,\t6,\t\n\n")

    def test_rank_three_blocks(self) -> None:
        t = FloatTensor((2, 1, 2), [1, 2, 3, 4], counter=self.counter)
        self.assertEqual(t.render(), "1,\t2,\t\n\n3,\t4,\t\n\n")

    def test_non_square_uses_correct_offsets(self) -> None:
        arr = np.arange(12, dtype=np.float32).reshape(3, 4)
        text = FloatTensor.from_numpy(arr, counter=self.counter).render()
        rows = text.rstrip("\n").split("\n")
        self.assertEqual(len(rows), 3)
        for j, row in enumerate(rows):
            values = [float(v) for v in row.split(",\t") if v]
            self.assertEqual(values, arr[j].tolist())

    def test_higher_rank_prints_leading_slab_with_notice(self) -> None:
        arr = np.arange(16, dtype=np.float32).reshape(2, 2, 2, 2)
        text = FloatTensor.from_numpy(arr, counter=self.counter).render()
        self.assertTrue(text.startswith(TRUNCATION_NOTICE))
        self.assertEqual(
            text[len(TRUNCATION_NOTICE):], format_tensor((2, 2, 2), arr[0].reshape(-1))
        )

    def test_render_does_not_mutate(self) -> None:
        t = FloatTensor((2,), [1, 2], counter=self.counter)
        t.render()
        self.assertEqual(t.tolist(), [1.0, 2.0])


if __name__ == "__main__":
    unittest.main()
