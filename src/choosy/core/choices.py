"""Choice store: canonical ordered choices with stable ids."""

from typing import Iterable, Optional

from choosy.utils.exceptions import NO_CHOICES, ConfigurationError


class Choice:
    """A single pickable entry.

    ``id`` is the position in the original input and is read-only;
    only ``selected`` and ``hidden`` change during a session.
    """

    __slots__ = ("_id", "value", "selected", "hidden")

    def __init__(self, id: int, value: str, selected: bool = False, hidden: bool = False):
        self._id = id
        self.value = value
        self.selected = selected
        self.hidden = hidden

    @property
    def id(self) -> int:
        return self._id

    def __repr__(self) -> str:
        return (
            f"Choice(id={self._id}, value={self.value!r}, "
            f"selected={self.selected}, hidden={self.hidden})"
        )


class ChoiceStore:
    """Ordered choices plus the selection/hidden flags.

    Storage is never reordered; views such as :meth:`visible` are derived
    in id order on demand.
    """

    def __init__(self, values: Iterable[str]):
        self.choices: list[Choice] = [
            Choice(id=i, value=value) for i, value in enumerate(values)
        ]
        if not self.choices:
            raise ConfigurationError("no choices to choose from", tag=NO_CHOICES)
        self.choices[0].selected = True

    def __len__(self) -> int:
        return len(self.choices)

    def __iter__(self):
        return iter(self.choices)

    def visible(self) -> list[Choice]:
        """Non-hidden choices in id order."""
        return [c for c in self.choices if not c.hidden]

    @property
    def selected(self) -> Optional[Choice]:
        """The selected visible choice, or None."""
        for choice in self.choices:
            if choice.selected and not choice.hidden:
                return choice
        return None

    def select(self, choice: Optional[Choice]) -> Optional[Choice]:
        """Make ``choice`` the only selected entry (None clears selection)."""
        for c in self.choices:
            c.selected = False
        if choice is not None:
            choice.selected = True
        return choice

    def clear_selection(self):
        self.select(None)

    def select_first_visible(self) -> Optional[Choice]:
        """Select the first visible choice, clearing selection if none is visible."""
        visible = self.visible()
        return self.select(visible[0] if visible else None)
