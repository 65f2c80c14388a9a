"""Progress bar shown while chunks are fetched."""
import sys
from typing import Optional, TextIO
from tqdm import tqdm
from contrib_stats.domain.reporting_interface import IProgressListener


class TqdmProgress(IProgressListener):
    """Renders chunk completion as a percentage bar on stderr.

    The bar is cleared when the run ends so it never mixes with the report.
    """

    def __init__(self, stream: Optional[TextIO] = None, disable: Optional[bool] = None):
        """Initialize progress bar.

        Args:
            stream: Output stream, stderr by default
            disable: Force the bar on or off; None disables it when the stream is not a TTY
        """
        self._stream = stream or sys.stderr
        self._disable = disable
        self._bar: Optional[tqdm] = None
        self._position = 0

    def start(self, total: int) -> None:
        self._position = 0
        self._bar = tqdm(
            total=total,
            desc="Fetching data",
            unit="chunk",
            file=self._stream,
            leave=False,
            disable=self._disable,
            bar_format="{desc}: [{bar:50}] {percentage:3.0f}%"
        )

    def advance(self, completed: int) -> None:
        if self._bar is None or completed <= self._position:
            return
        self._bar.update(completed - self._position)
        self._position = completed

    def finish(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    @property
    def position(self) -> int:
        return self._position
