"""Benchmark the streaming Base64 encoder against the stdlib codec.

Run with:
    python benchmarks/benchmark_encoder.py
"""

import base64
import io
import os
import time

from bookgen import StringSink, encode_bytes, render_book
from bookgen.encoding import iter_encoded


def bench(label: str, fn, iterations: int = 5) -> float:
    fn()  # warmup
    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    elapsed = (time.perf_counter() - start) / iterations
    print(f"{label:<32} {elapsed * 1000:8.2f} ms")
    return elapsed


def main() -> None:
    payload = os.urandom(1024 * 1024)
    expected = base64.b64encode(payload).decode("ascii")
    assert encode_bytes(payload) == expected

    print("1 MiB payload")
    stdlib = bench("stdlib base64.b64encode", lambda: base64.b64encode(payload))
    whole = bench("bookgen encode_bytes", lambda: encode_bytes(payload))

    def streamed() -> None:
        sink = StringSink()
        for text in iter_encoded(io.BytesIO(payload)):
            sink.write(text)

    bench("bookgen iter_encoded -> sink", streamed)
    print(f"encode_bytes is {whole / stdlib:.0f}x slower than the C codec")

    def book() -> None:
        def build(b):
            for i in range(200):
                b.heading(1, f"Chapter {i}")
                for j in range(5):
                    b.heading(2, f"Section {j}")
                    b.text("Lorem ipsum dolor sit amet.")
            b.toc()

        render_book(build)

    print()
    bench("1200 headings + TOC", book)


if __name__ == "__main__":
    main()
