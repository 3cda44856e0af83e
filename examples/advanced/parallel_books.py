"""Each session owns its state, so 200 books can be built in parallel."""

from concurrent.futures import ThreadPoolExecutor

from bookgen import render_book


def build(n: int) -> str:
    def chapters(book):
        for i in range(n % 7 + 1):
            book.heading(1, f"Chapter {i + 1} of book {n}")
            book.text("Content")
        book.toc()

    return render_book(chapters)


with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(build, range(200)))

print(f"Built {len(results)} books in parallel")
print("Largest book:", max(len(html) for html in results), "characters")
