import unittest

from floatcore.domain import Backend


class TestBackend(unittest.TestCase):
    def test_parse_host_aliases(self) -> None:
        for raw in ("cpu", "host", "CPU", " Host "):
            with self.subTest(raw=raw):
                self.assertIs(Backend.parse(raw), Backend.HOST)

    def test_parse_device_aliases(self) -> None:
        for raw in ("gpu", "device", "cuda", "cuda:0", "CUDA:0"):
            with self.subTest(raw=raw):
                self.assertIs(Backend.parse(raw), Backend.DEVICE)

    def test_parse_passes_members_through(self) -> None:
        self.assertIs(Backend.parse(Backend.DEVICE), Backend.DEVICE)

    def test_parse_rejects_unknown(self) -> None:
        with self.assertRaises(ValueError):
            Backend.parse("tpu")

    def test_parse_rejects_other_device_ordinals(self) -> None:
        for raw in ("cuda:1", "CUDA:3", "cuda:", "cuda:x"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    Backend.parse(raw)

    def test_predicates_and_str(self) -> None:
        self.assertTrue(Backend.HOST.is_host())
        self.assertFalse(Backend.HOST.is_device())
        self.assertTrue(Backend.DEVICE.is_device())
        self.assertEqual(str(Backend.HOST), "cpu")
        self.assertEqual(str(Backend.DEVICE), "gpu")


if __name__ == "__main__":
    unittest.main()
