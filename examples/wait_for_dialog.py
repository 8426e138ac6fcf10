"""
Example: wait for a dialog triggered on another thread, then for it to close.

A background thread plays the UI: after a short delay it opens a "Saved"
dialog over the main screen and dismisses it a moment later. The test side
only ever observes snapshots.

Usage:
  python examples/wait_for_dialog.py
"""

import logging
import threading
import time

from uiprobe import ElementKind, EngineOptions, Solo, Timeouts
from uiprobe.backends import MemoryBackend


def simulate_save(backend: MemoryBackend) -> None:
    time.sleep(0.3)
    dialog = backend.add_window(context="dialog", title="Saved")
    backend.add_element(ElementKind.TEXT, text="Document saved", window_uid=dialog.uid)
    backend.add_element(ElementKind.BUTTON, text="OK", window_uid=dialog.uid)
    time.sleep(1.0)
    backend.remove_window(dialog.uid)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    backend = MemoryBackend()
    backend.open_screen("Editor", context="app")
    backend.add_element(ElementKind.EDIT_TEXT, text="Hello", id=1)
    backend.add_element(ElementKind.BUTTON, text="Save", id=2)

    solo = Solo(backend, EngineOptions(timeouts=Timeouts(pause_ms=100, mini_pause_ms=50)))

    save = solo.get_view_by_text(ElementKind.BUTTON, "Save")
    print(f"clicking {save.kind.display_name} {save.text!r}")
    threading.Thread(target=simulate_save, args=(backend,), daemon=True).start()

    if not solo.wait_for_dialog_to_open(5_000):
        raise SystemExit("dialog never opened")
    label = solo.wait_for_text("saved", timeout_ms=2_000)
    print(f"dialog says: {label.text if label else None}")

    ok = solo.get_view(ElementKind.BUTTON, 0)
    print(f"first visible button: {ok.text if ok else None}")

    closed = solo.wait_for_dialog_to_close(5_000)
    print(f"dialog closed: {closed}")


if __name__ == "__main__":
    main()
