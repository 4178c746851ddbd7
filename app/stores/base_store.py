from pydantic import BaseModel, ValidationError
from typing import Callable, Dict, Generic, List, TypeVar
import logging

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)
Listener = Callable[[S, S], None]


class Pagination(BaseModel):
    current_page: int = 1
    page_size: int = 10
    total_items: int = 0


def describe_validation_error(error: ValidationError) -> str:
    """First validation problem as a one line message for the error banner"""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"Invalid {field}: {first['msg']}"


class ObservableStore(Generic[S]):
    """
    Single-writer state cell for dashboard state.

    Only the store's own actions call set_state; every change builds a new state object and
    notifies subscribers with (new_state, previous_state).

    Each async fetch takes a generation number for its state slice. A response is applied only
    while its generation is still the newest for that slice, so a slow reply can never overwrite
    the result of a request issued after it.
    """

    def __init__(self, initial_state: S):
        self._state = initial_state
        self._listeners: List[Listener] = []
        self._generations: Dict[str, int] = {}

    def get_state(self) -> S:
        return self._state

    def set_state(self, **changes) -> S:
        previous = self._state
        self._state = previous.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self._state, previous)
            except Exception:
                logger.exception("Store listener failed")
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; call the returned function to unsubscribe"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --------------------------------------------------------------

    def _next_generation(self, slice_name: str) -> int:
        generation = self._generations.get(slice_name, 0) + 1
        self._generations[slice_name] = generation
        return generation

    def _is_latest(self, slice_name: str, generation: int) -> bool:
        if self._generations.get(slice_name) != generation:
            logger.debug(f"Dropping stale {slice_name} response (generation {generation})")
            return False
        return True
