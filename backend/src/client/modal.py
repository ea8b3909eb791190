"""Global store for the movie info modal."""
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class InfoModalState:
    """Which movie the info modal shows, if it is open."""

    movie_id: str | None = None
    is_open: bool = False


class InfoModalStore:
    """Observable holder of InfoModalState."""

    def __init__(self) -> None:
        self._state = InfoModalState()
        self._listeners: list[Callable[[InfoModalState], None]] = []

    @property
    def state(self) -> InfoModalState:
        """The current modal state."""
        return self._state

    def subscribe(self, listener: Callable[[InfoModalState], None]) -> Callable[[], None]:
        """Register a listener. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, state: InfoModalState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def open_modal(self, movie_id: str) -> None:
        """Open the modal on `movie_id` and notify listeners."""
        self._set(InfoModalState(movie_id=movie_id, is_open=True))

    def close_modal(self) -> None:
        """Close the modal and clear its movie id."""
        self._set(InfoModalState())
