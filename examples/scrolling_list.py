"""
Example: find text further down a scrolling list.

MemoryBackend with a viewport only reports the rows currently on screen as
visible; searches scroll a page at a time until the text shows up or the list
ends.

Usage:
  python examples/scrolling_list.py
"""

from uiprobe import ElementKind, Solo, WaitSpec
from uiprobe.backends import MemoryBackend


def main() -> None:
    backend = MemoryBackend(viewport_rows=5)
    backend.open_screen("Contacts")
    for row, name in enumerate(["Ada", "Alan", "Barbara", "Claude", "Donald", "Edsger", "Grace", "Ken", "Linus"]):
        backend.add_element(ElementKind.TEXT, text=name, row=row)

    solo = Solo(backend)
    result = solo.waiter.wait_for(WaitSpec(text="^Grace$", timeout_ms=3_000, only_visible=True))
    print(f"found={result.found} after {backend.scroll_count} scroll(s), {result.duration_ms}ms")

    backend.scroll_to_top()
    second = solo.wait_for_text("^A", min_matches=2, only_visible=True, timeout_ms=1_000)
    print(f"second name starting with A: {second.text if second else None}")


if __name__ == "__main__":
    main()
