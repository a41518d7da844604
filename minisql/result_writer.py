"""Formats query results as a bordered text table."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO


class ResultWriter:
    """Writes table cells, dividers and a closing summary line to a stream."""

    def __init__(self, stream: TextIO, disable_header: bool = False, separator: str = "|") -> None:
        self.stream = stream
        self.disable_header = disable_header
        self.separator = separator

    def write_cell(self, cell: str, width: int) -> None:
        """Write one left-aligned cell padded to ``width``."""
        self.stream.write(f" {cell:<{width}} {self.separator}")

    def write_header_cell(self, cell: str, width: int) -> None:
        """Write a header cell unless headers are disabled."""
        if not self.disable_header:
            self.write_cell(cell, width)

    def divider(self, widths: Iterable[int]) -> None:
        """Write a ``+---+`` line matching the given column widths."""
        parts = ["+"]
        parts.extend("+".rjust(width + 3, "-") for width in widths)
        parts.append("\n")
        self.stream.write("".join(parts))

    def begin_row(self) -> None:
        self.stream.write("|")

    def end_row(self) -> None:
        self.stream.write("\n")
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()

    def end_information(self, result_size: int, time_ms: float, is_scan: bool) -> None:
        """Write the summary line; ``time_ms`` is shown in seconds."""
        if is_scan:
            summary = "Empty set" if not result_size else f"{result_size} row in set"
        else:
            summary = f"Query OK, {result_size} row affected"
        self.stream.write(f"{summary}({time_ms / 1000:.4f} sec).\n")
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()