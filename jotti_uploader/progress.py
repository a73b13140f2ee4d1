"""
Module for rendering upload progress while a request body is being sent.
"""
import sys
import time
from typing import Callable, Iterator, Optional, TextIO

PROGRESS_BAR_WIDTH = 20
DEFAULT_RENDER_INTERVAL = 0.15
CHUNK_SIZE = 64 * 1024


class ProgressReader:
    """Wraps a readable byte source and draws a progress bar as it is consumed.

    Reads are forwarded untouched: the wrapper never buffers, never changes the
    amount of data returned, and lets end-of-data and exceptions from the source
    through as they are.
    """

    def __init__(self, source, total: int, stream: Optional[TextIO] = None,
                 interval: float = DEFAULT_RENDER_INTERVAL,
                 clock: Callable[[], float] = time.monotonic):
        """Initialize the reader.
        
        Args:
            source: Object with a ``read(size)`` method returning bytes
            total: Number of bytes the source will produce
            stream: Text stream for progress output, stderr if None
            interval: Minimum seconds between two intermediate renders
            clock: Monotonic time source
        """
        self._source = source
        self.total = total
        self.bytes_read = 0
        self.interval = interval
        self._stream = stream
        self._clock = clock
        self._last_render: Optional[float] = None
        self.render_count = 0
        self.done = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 100.0
        return self.bytes_read * 100 / self.total

    def read(self, size: int = -1) -> bytes:
        chunk = self._source.read(size)
        if chunk:
            self.bytes_read += len(chunk)
            now = self._clock()
            if (self._last_render is None
                    or now - self._last_render >= self.interval
                    or self.bytes_read == self.total):
                self._render()
                self._last_render = now
        elif size != 0:
            self._render_done()
        return chunk

    def __iter__(self) -> Iterator[bytes]:
        chunk = self.read(CHUNK_SIZE)
        while chunk:
            yield chunk
            chunk = self.read(CHUNK_SIZE)

    def _bar(self, filled: int) -> str:
        filled = min(filled, PROGRESS_BAR_WIDTH)
        return "=" * filled + " " * (PROGRESS_BAR_WIDTH - filled)

    def _render(self) -> None:
        percent = self.percent
        filled = int(percent / (100 / PROGRESS_BAR_WIDTH))
        self._write(f"\rProgress: [{self._bar(filled)}] {percent:6.2f}%")

    def _render_done(self) -> None:
        if self.done:
            return
        self.done = True
        self._write(f"\rProgress: [{self._bar(PROGRESS_BAR_WIDTH)}] 100.00% (sent) - waiting response...")

    def _write(self, text: str) -> None:
        self.render_count += 1
        self.stream.write(text)
        self.stream.flush()

    def finish(self) -> None:
        """End the progress line once a response has arrived."""
        if self.render_count:
            self.stream.write("\n")
            self.stream.flush()
