"""Tests for the progress bar listener."""
import io
from contrib_stats.infrastructure.progress import TqdmProgress


def test_progress_advances_monotonically():
    """Test that stale or repeated counts do not move the bar."""
    progress = TqdmProgress(stream=io.StringIO(), disable=False)

    progress.start(3)
    progress.advance(1)
    progress.advance(1)
    progress.advance(3)
    progress.advance(2)

    assert progress.position == 3
    progress.finish()


def test_progress_renders_bar():
    """Test the bar output."""
    stream = io.StringIO()
    progress = TqdmProgress(stream=stream, disable=False)

    progress.start(4)
    progress.advance(2)
    progress.finish()

    assert "Fetching data" in stream.getvalue()
    assert "0%" in stream.getvalue()


def test_advance_before_start_is_ignored():
    """Test that notifications without a bar are harmless."""
    progress = TqdmProgress(stream=io.StringIO(), disable=True)

    progress.advance(1)
    progress.finish()

    assert progress.position == 0
