# app/selection.py
from collections.abc import Iterable, Iterator


class SelectionState:
    """Ordered set of schedule ids the user is focusing on.

    Empty means "no explicit selection": the projector works over the full
    supplied set.
    """

    def __init__(self, ids: Iterable[int] = ()):
        self._ids: dict[int, None] = dict.fromkeys(ids)

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(self._ids)

    def toggle(self, schedule_id: int) -> bool:
        """Flip membership; returns True when the id is now selected."""
        if schedule_id in self._ids:
            del self._ids[schedule_id]
            return False
        self._ids[schedule_id] = None
        return True

    def select_all(self, ids: Iterable[int]) -> None:
        self._ids = dict.fromkeys(ids)

    def clear(self) -> None:
        self._ids.clear()

    def __contains__(self, schedule_id: object) -> bool:
        return schedule_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

    def __repr__(self) -> str:
        return f"SelectionState({list(self._ids)!r})"
