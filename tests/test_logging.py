from __future__ import annotations

from unittest import TestCase
from unittest.mock import MagicMock, patch

from ArtGraph.logging.error import log_and_continue


class LogAndContinueTests(TestCase):
    def test_returns_result_when_call_succeeds(self) -> None:
        @log_and_continue("should not log")
        def add(a, b):
            return a + b

        self.assertEqual(5, add(2, 3))

    def test_failure_is_logged_as_warning_and_swallowed(self) -> None:
        logger = MagicMock()

        @log_and_continue("Failed to clean up test nodes", logger=logger)
        def sweep():
            raise RuntimeError("connection dropped")

        with patch("ArtGraph.logging.error.error_logger") as mock_error_logger:
            self.assertIsNone(sweep())

        logger.warning.assert_called_once_with("Failed to clean up test nodes: connection dropped")
        mock_error_logger.warning.assert_called_once()

    def test_keeps_function_metadata(self) -> None:
        @log_and_continue("ignored")
        def close_session():
            """Close it"""

        self.assertEqual("close_session", close_session.__name__)
        self.assertEqual("Close it", close_session.__doc__)
