"""A complete book: head, styles, nested headings, lists, figures, tables, TOC."""

import sys

from bookgen import Book, StreamSink

IMGLINK = "https://raw.githubusercontent.com/bratpeki/bratpeki.github.io/refs/heads/main/img/xrtd.svg"

with Book(StreamSink(sys.stdout)) as book:
    book.root('lang="en"')

    book.metadata()
    book.doctitle("BookGen Example Document")
    book.default_style()
    book.end_metadata()

    book.body()

    book.heading(1, "The first chapter header")
    book.heading(2, "Author's Note")
    book.text("This book was generated entirely from Python calls.")

    book.heading(1, "The second chapter header")
    book.heading(2, "Why a linear generator?")
    book.text("Honestly, simplicity!")
    book.linebreak(2)
    book.text("No tree, no templates: every call <i>is</i> the output.")

    book.heading(2, "The indentation engine")
    book.heading(3, "The depth counter")
    book.text("By tracking ")
    book.code_inline("depth")
    book.text(" we ensure the HTML source is neatly indented.")

    book.heading(3, "The heading logic")
    book.text("Notice how the numbers below are generated automatically.")

    book.heading(4, "Specific Case A")
    book.text(
        "Since <code>text()</code> is inserted verbatim, <i><b>you can inject HTML</b></i>! "
        'That means you can link stuff like <a href="https://www.google.com">this</a>!'
    )

    book.heading(4, "Specific Case B")
    book.text("Of course, though, there's <code>link()</code>.")
    book.link("https://www.google.com", "Here it is in action.")
    book.quote("I am quoting myself.", "Peki")

    book.pagebreak()

    book.heading(2, "Code blocks")
    book.text("For longer examples, use <code>code_block()</code>.")
    book.code_block(
        "def main() -&gt; None:\n"
        '    print("Hello from Python!")\n'
        "\n"
        'if __name__ == "__main__":\n'
        "    main()"
    )

    book.heading(2, "Working with lists")
    book.ul()
    book.li("Item 1")
    book.li("Item 2")
    book.li("Item 3")
    book.ol()
    book.li("Subitem 1")
    book.li("Subitem 2")
    book.li("Subitem 3")
    book.end_ol()
    book.li("Item 4")
    book.end_ul()

    book.pagebreak()

    book.heading(2, "Images!")
    book.figure()
    book.img(IMGLINK, 'width="250px"')
    book.figcaption("My music logo")
    book.end_figure()

    book.heading(2, "A simple table")
    book.table()
    book.caption("Python implementations")
    book.table_row()
    book.th("Implementation")
    book.th("Language")
    book.th("Notes")
    book.end_table_row()
    for name, lang, notes in [
        ("CPython", "C", "Reference implementation"),
        ("PyPy", "RPython", "JIT compiler"),
        ("GraalPy", "Java", "Runs on GraalVM"),
    ]:
        book.table_row()
        book.td(name)
        book.td(lang)
        book.td(notes)
        book.end_table_row()
    book.end_table()

    book.pagebreak()

    book.toc()

    book.end_body()
    book.end_root()
