"""Relax the strict policies: skipped levels, stray closes, missing assets."""

import logging

from bookgen import BookConfig, render_book

logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")

config = BookConfig(strict_levels=False, strict_depth=False, strict_assets=False)


def build(book):
    book.heading(1, "Top")
    book.heading(3, "Skipped a level")  # labelled 1.0.1., logged
    book.end_body()  # unmatched close, clamped and logged
    book.img_embedded("does-not-exist.png")  # emits nothing, logged
    book.toc(max_depth=1)


print(render_book(build, config=config))
