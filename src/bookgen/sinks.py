"""Output sinks for generated documents.

A sink is an append-only destination: the session writes text in call order
and never seeks or reads back. Three implementations are provided:

- StringSink: in-memory accumulator. Appends to a list, joins once on
  getvalue(): O(n) total vs O(n²) for repeated string concatenation.
- StreamSink: wraps an existing binary or text stream (stdout, a socket file,
  io.BytesIO). Binary streams receive encoded bytes.
- FileSink: opens and owns a binary file.

Thread Safety:
Sinks are owned by exactly one session. No shared mutable state.

"""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO, Protocol

from bookgen.errors import SinkClosedError


class OutputSink(Protocol):
    """Protocol for document output destinations.

    Implementations accept text writes in call order. flush() and close()
    must be safe to call more than once.

    """

    def write(self, text: str) -> None:
        """Append text to the destination."""
        ...

    def flush(self) -> None:
        """Push buffered output to the destination."""
        ...

    def close(self) -> None:
        """Flush and release the destination."""
        ...


class StringSink:
    """In-memory sink.

    Usage:
            >>> sink = StringSink()
            >>> sink.write("<h1>")
            >>> sink.write("Hello")
            >>> sink.write("</h1>")
            >>> sink.getvalue()
            '<h1>Hello</h1>'

    getvalue() stays available after close() so the document can be
    collected once the session has ended.

    """

    __slots__ = ("_closed", "_parts")

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._closed = False

    def write(self, text: str) -> None:
        """Append text (empty strings are skipped).

        Raises:
            SinkClosedError: If the sink has been closed
        """
        if self._closed:
            raise SinkClosedError("write to closed StringSink")
        if text:
            self._parts.append(text)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def getvalue(self) -> str:
        """Join all parts into the final document.

        Returns:
            Concatenated text of all writes
        """
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of writes (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if anything has been written."""
        return bool(self._parts)


class StreamSink:
    """Sink over an existing stream.

    Text streams (io.TextIOBase) receive str; anything else is treated as a
    binary stream and receives bytes encoded with ``encoding``.

    By default the wrapped stream is flushed but not closed on close(), so
    sys.stdout and caller-owned buffers survive the session.
    """

    __slots__ = ("_binary", "_close_stream", "_closed", "_encoding", "_stream")

    def __init__(
        self,
        stream: IO[bytes] | IO[str],
        *,
        encoding: str = "utf-8",
        close_stream: bool = False,
    ) -> None:
        """Initialize stream sink.

        Args:
            stream: Destination stream
            encoding: Encoding for binary streams
            close_stream: Close the wrapped stream on close()
        """
        self._stream = stream
        self._encoding = encoding
        self._close_stream = close_stream
        self._binary = not isinstance(stream, io.TextIOBase)
        self._closed = False

    def write(self, text: str) -> None:
        if self._closed:
            raise SinkClosedError("write to closed StreamSink")
        if not text:
            return
        if self._binary:
            self._stream.write(text.encode(self._encoding))  # type: ignore[arg-type]
        else:
            self._stream.write(text)  # type: ignore[arg-type]

    def flush(self) -> None:
        if not self._closed:
            self._stream.flush()

    def close(self) -> None:
        if self._closed:
            return
        try:
            self._stream.flush()
        finally:
            self._closed = True
            if self._close_stream:
                self._stream.close()

    @property
    def closed(self) -> bool:
        return self._closed


class FileSink(StreamSink):
    """Sink that opens and owns a file.

    Example:
        >>> with DocumentSession(FileSink("book.html")) as book:
        ...     book.heading(1, "Intro")
    """

    __slots__ = ("path",)

    def __init__(self, path: str | Path, *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        super().__init__(self.path.open("wb"), encoding=encoding, close_stream=True)


__all__ = ["FileSink", "OutputSink", "StreamSink", "StringSink"]
