import logging
import os
import tempfile
import unittest


def _close_file_handlers() -> None:
    root = logging.getLogger()
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            h.close()
            root.removeHandler(h)


class TestLoggingSetup(unittest.TestCase):
    def test_configure_logging_file_only_no_console(self) -> None:
        from breakout_algo.logging_setup import configure_logging

        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "logs", "breakout.log")
            configure_logging(level=logging.INFO, log_file=path, console=False)
            root = logging.getLogger()

            # No console StreamHandler writing to stdout/stderr.
            console_handlers = [
                h
                for h in root.handlers
                if isinstance(h, logging.StreamHandler)
                and not isinstance(h, logging.FileHandler)
            ]
            self.assertEqual(console_handlers, [])
            self.assertTrue(any(isinstance(h, logging.FileHandler) for h in root.handlers))
            self.assertTrue(os.path.isdir(os.path.join(td, "logs")))
            _close_file_handlers()

    def test_level_by_name(self) -> None:
        from breakout_algo.logging_setup import configure_logging

        configure_logging(level="debug")
        self.assertEqual(logging.getLogger().level, logging.DEBUG)

    def test_unknown_level_name_falls_back_to_info(self) -> None:
        from breakout_algo.logging_setup import configure_logging

        configure_logging(level="chatty")
        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_no_handlers_still_configured(self) -> None:
        from breakout_algo.logging_setup import configure_logging

        configure_logging(console=False)
        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], logging.NullHandler)
