"""Streaming Base64 encoder for inlining assets.

Encodes a byte source window by window (3 input bytes -> 4 output
characters) and writes the text straight to an output sink, so an embedded
image is never held in memory as a whole.

Padding:
    Only the final window may be short. 2 trailing bytes produce one "=",
    1 trailing byte produces "==", an exact multiple of 3 produces none.
    Reads that return fewer bytes than requested carry the partial window
    over to the next read instead of padding it.

Example:
    >>> encode_bytes(b"Man")
    'TWFu'
    >>> encode_bytes(b"Ma")
    'TWE='
    >>> encode_bytes(b"M")
    'TQ=='
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import IO

from bookgen.errors import AssetError
from bookgen.sinks import OutputSink
from bookgen.utils.logger import get_logger

logger = get_logger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
PAD = "="

# Multiple of 3 so that only the last read can leave a partial window
DEFAULT_CHUNK_SIZE = 3 * 1024


def encode_window(window: bytes) -> str:
    """Encode one window of 0 to 3 bytes.

    Args:
        window: Up to three input bytes

    Returns:
        Four characters (padded for short windows), or "" for an empty window

    Raises:
        ValueError: If the window is longer than 3 bytes
    """
    size = len(window)
    if size == 0:
        return ""
    if size > 3:
        raise ValueError(f"Base64 window holds at most 3 bytes, got {size}")

    b0 = window[0]
    b1 = window[1] if size > 1 else 0
    b2 = window[2] if size > 2 else 0

    first = ALPHABET[b0 >> 2]
    second = ALPHABET[((b0 & 0x03) << 4) | (b1 >> 4)]
    if size == 1:
        return f"{first}{second}{PAD}{PAD}"

    third = ALPHABET[((b1 & 0x0F) << 2) | (b2 >> 6)]
    if size == 2:
        return f"{first}{second}{third}{PAD}"

    return f"{first}{second}{third}{ALPHABET[b2 & 0x3F]}"


def _encode_full_windows(data: bytes) -> str:
    """Encode a buffer whose length is a multiple of 3."""
    return "".join(encode_window(data[i : i + 3]) for i in range(0, len(data), 3))


def iter_encoded(stream: IO[bytes], chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[str]:
    """Encode a binary stream, yielding Base64 text as it is produced.

    Args:
        stream: Readable binary stream
        chunk_size: Bytes requested per read

    Yields:
        Encoded text fragments; concatenated they form one Base64 stream
    """
    if chunk_size < 3:
        raise ValueError(f"chunk_size must be at least 3, got {chunk_size}")

    carry = b""
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        data = carry + chunk
        usable = len(data) - len(data) % 3
        carry = data[usable:]
        if usable:
            yield _encode_full_windows(data[:usable])

    if carry:
        yield encode_window(carry)


def encode_bytes(data: bytes) -> str:
    """Encode an in-memory byte string."""
    usable = len(data) - len(data) % 3
    return _encode_full_windows(data[:usable]) + encode_window(data[usable:])


def open_asset(path: str | Path, *, strict: bool = True) -> IO[bytes] | None:
    """Open an asset for reading.

    Args:
        path: Asset file
        strict: Raise AssetError on failure. When False, log a warning and
            return None.

    Raises:
        AssetError: If the file cannot be opened (strict only)
    """
    try:
        return Path(path).open("rb")
    except OSError as exc:
        if strict:
            raise AssetError(path, f"cannot open ({exc.strerror or exc})") from exc
        logger.warning("Skipping asset %s: %s", path, exc)
        return None


def encode_file_to_sink(
    path: str | Path,
    sink: OutputSink,
    *,
    strict: bool = True,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    before: str = "",
    after: str = "",
) -> int:
    """Stream a file's contents into a sink as Base64 text.

    The file is opened before anything is written, so a missing file never
    leaves a partial embed behind: either the whole ``before`` + payload +
    ``after`` sequence is written, or nothing is. A read that fails once
    encoding has started still writes ``after`` before raising, so the
    surrounding markup stays closed around the truncated payload.

    Args:
        path: Asset file to encode
        sink: Destination for the encoded text
        strict: Raise AssetError when the file cannot be opened. When False,
            log a warning and write nothing.
        chunk_size: Bytes requested per read
        before: Text written ahead of the payload (e.g. a data: URI prefix)
        after: Text written after the payload

    Returns:
        Number of Base64 characters written

    Raises:
        AssetError: If the file cannot be opened (strict only) or a read
            fails after encoding has started
    """
    stream = open_asset(path, strict=strict)
    if stream is None:
        return 0

    written = 0
    with stream:
        sink.write(before)
        chunks = iter_encoded(stream, chunk_size)
        while True:
            try:
                text = next(chunks, None)
            except OSError as exc:
                sink.write(after)
                raise AssetError(path, f"read failed after {written} characters") from exc
            if text is None:
                break
            sink.write(text)
            written += len(text)
        sink.write(after)

    logger.debug("Embedded %s as %d Base64 characters", path, written)
    return written


__all__ = [
    "ALPHABET",
    "PAD",
    "encode_bytes",
    "encode_file_to_sink",
    "encode_window",
    "iter_encoded",
    "open_asset",
]
