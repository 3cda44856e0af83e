"""Inline an image as a Base64 data: URI; the file is streamed, not loaded."""

import sys
import tempfile
from pathlib import Path

from bookgen import Book, StreamSink

# 1x1 transparent PNG
PIXEL = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c63000100000500010d0a2db40000000049454e44ae426082"
)

with tempfile.TemporaryDirectory() as tmp:
    image = Path(tmp) / "pixel.png"
    image.write_bytes(PIXEL)

    with Book(StreamSink(sys.stdout)) as book:
        book.figure()
        book.img_embedded(image, attrs={"width": "64", "alt": "pixel"})
        book.figcaption("A single transparent pixel")
        book.end_figure()
