"""Tests for the timing context manager."""

from ragcore.utils.performance import timer


class TestTimer:

    def test_logs_elapsed_time(self, mocker):
        mock_logger = mocker.patch("ragcore.utils.performance.logger")

        with timer("Embedding chunks"):
            pass

        mock_logger.info.assert_called_once()
        assert "Embedding chunks took" in mock_logger.info.call_args[0][0]

    def test_threshold_suppresses_fast_operations(self, mocker):
        mock_logger = mocker.patch("ragcore.utils.performance.logger")

        with timer("fast", threshold_ms=10_000):
            pass

        mock_logger.info.assert_not_called()

    def test_logs_even_when_body_raises(self, mocker):
        mock_logger = mocker.patch("ragcore.utils.performance.logger")

        try:
            with timer("failing", log_level="WARNING"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        mock_logger.warning.assert_called_once()
