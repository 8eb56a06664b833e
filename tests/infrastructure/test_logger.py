import io
import logging
import unittest

from floatcore.infrastructure.logger import ColorFormatter, setup_logger


class TestSetupLogger(unittest.TestCase):
    def setUp(self) -> None:
        self.name = f"floatcore.tests.{self.id()}"
        self.addCleanup(self._drop_handlers)

    def _drop_handlers(self) -> None:
        logger = logging.getLogger(self.name)
        for h in list(logger.handlers):
            logger.removeHandler(h)

    def test_attaches_single_color_handler(self) -> None:
        logger = setup_logger(self.name, logging.DEBUG)
        setup_logger(self.name, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0].formatter, ColorFormatter)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_string_level_and_level_update(self) -> None:
        logger = setup_logger(self.name, "warning")
        self.assertEqual(logger.level, logging.WARNING)
        setup_logger(self.name, logging.ERROR)
        self.assertEqual(logger.level, logging.ERROR)
        self.assertEqual(len(logger.handlers), 1)


class TestColorFormatter(unittest.TestCase):
    def test_wraps_message_in_level_color(self) -> None:
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(ColorFormatter())
        logger = logging.getLogger("floatcore.tests.color")
        logger.propagate = False
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        self.addCleanup(logger.removeHandler, handler)

        logger.warning("device runtime missing")
        out = stream.getvalue()
        self.assertTrue(out.startswith(ColorFormatter.yellow))
        self.assertIn("WARNING - device runtime missing", out)
        self.assertIn(ColorFormatter.reset, out)


if __name__ == "__main__":
    unittest.main()
