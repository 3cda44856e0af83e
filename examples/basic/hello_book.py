"""Numbered headings and a table of contents in a few lines."""

from bookgen import render_book


def build(book):
    book.body()
    book.heading(1, "Hello")
    book.heading(2, "World")
    book.toc()
    book.end_body()


print(render_book(build))
