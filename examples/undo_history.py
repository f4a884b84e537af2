from typing import Any, Callable, List, Tuple

from proxyobserver import (
    UNDEFINED,
    ObservedChange,
    proxy_observer,
    resolve_path_reference,
    unwrap,
)

# --- Configuration ---
MAX_HISTORY = 50


class History:
    """Undo/redo built purely on the notifications of an observed document."""

    def __init__(self, document):
        self.document = document
        self.proxy = proxy_observer(document, self._record)
        self.undo_stack: List[ObservedChange] = []
        self.redo_stack: List[ObservedChange] = []

    def _record(self, *chain):
        self.undo_stack.append(ObservedChange.from_steps(*chain))
        del self.undo_stack[:-MAX_HISTORY]
        self.redo_stack.clear()

    def _apply(self, change: ObservedChange, value):
        container = unwrap(resolve_path_reference(change, self.document))
        prop = change.leaf.prop
        if isinstance(container, list):
            if value is UNDEFINED:
                del container[prop]
            elif change.leaf.old_value is UNDEFINED or change.leaf.value is UNDEFINED:
                container.insert(prop, value)
            else:
                container[prop] = value
        elif isinstance(container, dict):
            if value is UNDEFINED:
                container.pop(prop, None)
            else:
                container[prop] = value
        elif value is UNDEFINED:
            delattr(container, prop)
        else:
            setattr(container, prop, value)

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        change = self.undo_stack.pop()
        self._apply(change, change.old_value)
        self.redo_stack.append(change)
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        change = self.redo_stack.pop()
        self._apply(change, change.value)
        self.undo_stack.append(change)
        return True


def show(label: str, document) -> None:
    print(f"{label:<22} {document}")


if __name__ == "__main__":
    doc = {"title": "Draft", "tags": ["a"], "meta": {"rev": 1}}
    history = History(doc)
    edits: List[Tuple[str, Callable[[Any], None]]] = [
        ("rename", lambda p: p.__setitem__("title", "Final")),
        ("tag", lambda p: p["tags"].append("b")),
        ("bump revision", lambda p: p["meta"].__setitem__("rev", 2)),
        ("drop meta", lambda p: p.__delitem__("meta")),
    ]
    show("start", doc)
    for label, edit in edits:
        edit(history.proxy)
        show(label, doc)
    while history.undo():
        show("undo", doc)
    while history.redo():
        show("redo", doc)
