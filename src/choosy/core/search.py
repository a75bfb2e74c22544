"""Filter engine: recompute hidden flags from a search query."""

from choosy.core.choices import Choice, ChoiceStore
from choosy.utils.debug import debug_filter


class SearchQuery:
    """Mutable search text. Empty means no filtering."""

    def __init__(self, text: str = ""):
        self.text = text

    def __str__(self) -> str:
        return self.text

    def __bool__(self) -> bool:
        return bool(self.text)

    def append(self, char: str):
        self.text += char

    def backspace(self) -> bool:
        """Drop the last character. Returns False when already empty."""
        if not self.text:
            return False
        self.text = self.text[:-1]
        return True


def matches(choice: Choice, query: str) -> bool:
    """Literal, case-sensitive substring match."""
    return query in choice.value


def apply_query(store: ChoiceStore, query) -> list[Choice]:
    """Reapply ``query`` to every choice and repair the selection.

    Always recomputes from the full choice set, never from the previous
    result. If the selected choice became hidden, or nothing was selected,
    the first visible choice is selected; with nothing visible the
    selection is cleared.

    Returns:
        The visible choices in id order.
    """
    text = str(query)
    for choice in store:
        choice.hidden = not matches(choice, text)

    visible = store.visible()
    if store.selected is None:
        store.select(visible[0] if visible else None)

    debug_filter(
        "query applied",
        query=repr(text),
        visible=len(visible),
        selected=store.selected.id if store.selected else None,
    )
    return visible
