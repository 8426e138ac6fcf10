from __future__ import annotations

import threading

import pytest

from uiprobe.backends import ElementSearch, MemoryBackend, ScreenProvider, Scroller, ViewProvider
from uiprobe.errors import ProviderError
from uiprobe.models import ElementKind
from uiprobe.searcher import Searcher


def test_backend_implements_protocols() -> None:
    backend = MemoryBackend()
    assert isinstance(backend, ViewProvider)
    assert isinstance(backend, ScreenProvider)
    assert isinstance(backend, Scroller)
    assert isinstance(Searcher(backend), ElementSearch)


def test_current_screen_requires_open_screen() -> None:
    with pytest.raises(ProviderError):
        MemoryBackend().current_screen()


def test_elements_inherit_window_context() -> None:
    backend = MemoryBackend()
    screen = backend.open_screen("Main", context="app")
    dialog = backend.add_window(context="dialog")

    base_el = backend.add_element(ElementKind.TEXT, text="base")
    dialog_el = backend.add_element(ElementKind.TEXT, text="dlg", window_uid=dialog.uid)

    assert base_el.context == "app"
    assert base_el.window_uid == screen.window.uid
    assert dialog_el.context == "dialog"


def test_get_views_filters_by_kind_and_visibility() -> None:
    backend = MemoryBackend()
    backend.open_screen("Main")
    button = backend.add_element(ElementKind.BUTTON, text="OK")
    label = backend.add_element(ElementKind.TEXT, text="Hello")
    image = backend.add_element(ElementKind.IMAGE)
    hidden = backend.add_element(ElementKind.TEXT, text="hidden", shown=False)

    assert backend.get_views(ElementKind.BUTTON, False).elements == (button,)
    assert backend.get_views(ElementKind.TEXT, True).elements == (button, label)
    assert backend.get_views(ElementKind.TEXT, False).elements == (button, label, hidden)
    assert backend.get_views(None, False).elements == (button, label, image, hidden)


def test_snapshots_are_unaffected_by_later_mutation() -> None:
    backend = MemoryBackend()
    backend.open_screen("Main")
    el = backend.add_element(ElementKind.TEXT, text="before")
    snap = backend.get_views(ElementKind.TEXT, False)

    backend.update_element(el.uid, text="after")
    backend.add_element(ElementKind.TEXT, text="new")

    assert len(snap) == 1
    assert snap.elements[0].text == "before"
    assert backend.get_views(ElementKind.TEXT, False).elements[0].text == "after"


def test_remove_window_detaches_its_elements() -> None:
    backend = MemoryBackend()
    backend.open_screen("Main")
    dialog = backend.add_window(context="dialog")
    backend.add_element(ElementKind.BUTTON, text="Close", window_uid=dialog.uid)

    backend.remove_window(dialog.uid)

    assert backend.get_views(ElementKind.BUTTON, False).elements == ()
    assert [w.uid for w in backend.get_window_stack()] == [backend.current_screen().window.uid]
    with pytest.raises(ProviderError):
        backend.remove_window(dialog.uid)


def test_most_recently_added_window() -> None:
    backend = MemoryBackend()
    screen = backend.open_screen("Main")
    popup = backend.add_window(context="popup")

    assert backend.most_recently_added(backend.get_window_stack()) == popup
    backend.remove_window(popup.uid)
    assert backend.most_recently_added(backend.get_window_stack()) == screen.window
    assert backend.most_recently_added(()) is None


def test_set_window_shown_keeps_identity() -> None:
    backend = MemoryBackend()
    backend.open_screen("Main")
    popup = backend.add_window(context="popup")

    hidden = backend.set_window_shown(popup.uid, False)
    assert hidden == popup
    assert hidden.shown is False


def test_unknown_element_raises_provider_error() -> None:
    backend = MemoryBackend()
    with pytest.raises(ProviderError):
        backend.update_element(99, text="x")
    with pytest.raises(ProviderError):
        backend.remove_element(99)


def test_scroll_moves_viewport_by_pages() -> None:
    backend = MemoryBackend(viewport_rows=2)
    backend.open_screen("Main")
    rows = [backend.add_element(ElementKind.TEXT, text=f"{i}", row=i) for i in range(5)]

    assert backend.get_views(ElementKind.TEXT, True).elements == tuple(rows[0:2])
    assert backend.scroll_down() is True
    assert backend.get_views(ElementKind.TEXT, True).elements == tuple(rows[2:4])
    assert backend.scroll_down() is True
    assert backend.get_views(ElementKind.TEXT, True).elements == (rows[4],)
    assert backend.scroll_down() is False
    backend.scroll_to_top()
    assert backend.get_views(ElementKind.TEXT, True).elements == tuple(rows[0:2])


def test_concurrent_mutation_while_reading() -> None:
    backend = MemoryBackend()
    backend.open_screen("Main")
    stop = threading.Event()

    def ui_thread() -> None:
        i = 0
        while not stop.is_set():
            el = backend.add_element(ElementKind.TEXT, text=f"t{i}")
            backend.remove_element(el.uid)
            i += 1

    worker = threading.Thread(target=ui_thread)
    worker.start()
    try:
        for _ in range(200):
            snap = backend.get_views(ElementKind.TEXT, False)
            assert len(snap) in (0, 1)
    finally:
        stop.set()
        worker.join()
