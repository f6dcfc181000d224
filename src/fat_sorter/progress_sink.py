"""Destinations for the reorganizer's log lines and status messages."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List


class ProgressSink(ABC):
    """Receives a sequential stream of log lines and a live status string."""

    @abstractmethod
    def log(self, line: str) -> None:
        """Record one complete line of output."""

    @abstractmethod
    def set_status(self, text: str) -> None:
        """Replace the "currently processing" status."""

    def close(self) -> None:
        """Release any display resources."""


class NullProgressSink(ProgressSink):
    """Discards everything."""

    def log(self, line: str) -> None:
        pass

    def set_status(self, text: str) -> None:
        pass


class RecordingProgressSink(ProgressSink):
    """Keeps every line in memory so a transcript can be saved later."""

    def __init__(self):
        self.lines: List[str] = []
        self.status: str = ""
        self.status_updates = 0

    def log(self, line: str) -> None:
        self.lines.append(line)

    def set_status(self, text: str) -> None:
        self.status = text
        self.status_updates += 1

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)

    def save(self, output_path: Path, encoding: str = "utf-8") -> None:
        """Write the transcript to a text file, replacing any existing file."""
        with open(output_path, 'w', encoding=encoding) as f:
            f.write(self.text)


class TeeProgressSink(ProgressSink):
    """Forwards every call to several sinks in order."""

    def __init__(self, *sinks: ProgressSink):
        self.sinks = list(sinks)

    def log(self, line: str) -> None:
        for sink in self.sinks:
            sink.log(line)

    def set_status(self, text: str) -> None:
        for sink in self.sinks:
            sink.set_status(text)

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()
