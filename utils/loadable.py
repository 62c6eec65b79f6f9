import asyncio
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class LoadableState(Enum):
    """Enum for the lifecycle of an asynchronously loaded value"""
    LOADING = "loading"
    ERROR = "error"
    LOADED = "loaded"


class Loadable(Generic[T]):
    """
    Tracks the state of any value that is loaded asynchronously.

    Exactly one of loading, error(cause) or loaded(value) is active at a time.
    The owner may move it to any other state; no transitions are enforced.
    """

    def __init__(self, state: LoadableState = LoadableState.LOADING, *,
                 value: Optional[T] = None, cause: Optional[BaseException] = None):
        if state is LoadableState.ERROR and cause is None:
            raise ValueError("An error state needs a cause")
        if state is LoadableState.LOADED and value is None:
            raise ValueError("A loaded state needs a value")
        self._state = state
        self._value = value if state is LoadableState.LOADED else None
        self._cause = cause if state is LoadableState.ERROR else None

    @property
    def state(self) -> LoadableState:
        return self._state

    @classmethod
    def loading(cls) -> "Loadable[T]":
        return cls(LoadableState.LOADING)

    @classmethod
    def error(cls, cause: BaseException) -> "Loadable[T]":
        return cls(LoadableState.ERROR, cause=cause)

    @classmethod
    def loaded(cls, value: T) -> "Loadable[T]":
        return cls(LoadableState.LOADED, value=value)

    @classmethod
    def empty(cls) -> "Loadable[list]":
        """Successfully loaded, empty collection"""
        return cls.loaded([])

    @property
    def is_loading(self) -> bool:
        return self._state is LoadableState.LOADING

    @property
    def is_error(self) -> bool:
        return self._state is LoadableState.ERROR

    @property
    def is_loaded(self) -> bool:
        return self._state is LoadableState.LOADED

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause if self.is_error else None

    def peek(self) -> Optional[T]:
        """Return the loaded value, or None in any other state"""
        if self.is_loaded:
            return self._value
        return None

    def assign_if_present(self, new_value: Optional[T]) -> None:
        """
        Move to loaded(new_value) whatever the current state is.
        Passing None leaves the state untouched, so this can never clear or error the container.
        """
        if new_value is None:
            return
        self._state = LoadableState.LOADED
        self._value = new_value
        self._cause = None

    def __eq__(self, other):
        if not isinstance(other, Loadable):
            return NotImplemented
        if self._state is not other._state:
            return False
        if self.is_error:
            return str(self._cause) == str(other._cause)
        if self.is_loaded:
            return self._value == other._value
        return True

    __hash__ = None

    def __repr__(self):
        if self.is_error:
            return f"Loadable.error({self._cause!r})"
        if self.is_loaded:
            return f"Loadable.loaded({self._value!r})"
        return "Loadable.loading()"

    # Preview helpers, not used by the app itself

    @classmethod
    def preview_error(cls) -> "Loadable[T]":
        return cls.error(PreviewError("Stuff"))

    async def simulate(self, timeout: float = 10) -> T:
        """
        Resolve the container the way a repository call would.
        A container left in loading times out so a test that never moves it fails loudly.
        """
        if self.is_error:
            raise self._cause
        if self.is_loaded:
            return self._value
        await asyncio.sleep(timeout)
        raise TimeoutError("Timeout exceeded in loading case")


class PreviewError(Exception):
    pass
