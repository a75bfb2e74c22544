"""Selection movement over the visible choices."""

from enum import Enum
from typing import Optional

from choosy.core.choices import Choice, ChoiceStore
from choosy.utils.debug import debug_nav


class Direction(Enum):
    UP = -1
    DOWN = 1


def move(store: ChoiceStore, direction: Direction, step: int = 1) -> Optional[Choice]:
    """Move the selection ``step`` entries in ``direction``.

    The target is clamped to the visible range, so a move past either end
    lands on the first/last visible choice (and a move at the boundary
    returns the unchanged choice). If nothing visible is selected, the
    first visible choice is selected instead.

    Args:
        store: Choice store to mutate
        direction: Direction.UP or Direction.DOWN
        step: Number of entries to move; 0 is a no-op

    Returns:
        The newly selected choice, or None when nothing is visible
    """
    if step < 0:
        raise ValueError(f"step must not be negative, got {step}")

    visible = store.visible()
    if not visible:
        return None

    current = store.selected
    if current is None:
        return store.select(visible[0])

    index = visible.index(current)
    target = index + step * direction.value
    target = max(0, min(len(visible) - 1, target))

    debug_nav(
        "move",
        direction=direction.name,
        step=step,
        position=index,
        target=target,
    )
    return store.select(visible[target])
