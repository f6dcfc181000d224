"""Rich progress renderer for the CLI."""

import time
from typing import Callable, Optional

from rich.console import Console
from rich.status import Status
from rich.text import Text

from .progress_sink import ProgressSink

# Seconds between status updates, so a fast run stays readable
STATUS_INTERVAL = 0.7


class _StatusLine:
    """Spinner text that asks the sink what to show on every refresh."""

    def __init__(self, sink: "RichProgressSink"):
        self.sink = sink

    def __rich__(self) -> Text:
        return self.sink.current_status()


class RichProgressSink(ProgressSink):
    """Prints log lines on a Rich console and the current path on a spinner.

    A path reported within ``status_interval`` of the last one shown is held
    back, and the spinner picks it up on its next refresh once the interval
    has passed.
    """

    def __init__(self, console: Optional[Console] = None,
                 status_interval: float = STATUS_INTERVAL,
                 clock: Callable[[], float] = time.monotonic):
        """Initialize the Rich progress sink."""
        self.console = console or Console()
        self.status_interval = status_interval
        self.status: Optional[Status] = None
        self.pending_status = ""
        self.shown_status = ""
        self.last_status_time = 0.0
        self._clock = clock

    def log(self, line: str) -> None:
        style = "red" if line.startswith("Can't") or line.startswith("Not a folder") else None
        self.console.print(Text(line, style=style))

    def set_status(self, text: str) -> None:
        self.pending_status = text
        if not text:
            self._stop()
            return

        if self.status is None:
            self.shown_status = text
            self.last_status_time = self._clock()
            self.status = self.console.status(_StatusLine(self), spinner="dots")
            self.status.start()

    def current_status(self) -> Text:
        """Text for the spinner, advancing to the pending path when it's due."""
        if self.pending_status and self.pending_status != self.shown_status:
            now = self._clock()
            if now - self.last_status_time >= self.status_interval:
                self.shown_status = self.pending_status
                self.last_status_time = now
        return Text(self.shown_status, style="bold blue", overflow="ellipsis", no_wrap=True)

    def close(self) -> None:
        self._stop()

    def _stop(self) -> None:
        if self.status is not None:
            self.status.stop()
            self.status = None
