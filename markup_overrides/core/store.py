from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterator, TypeVar

from markup_overrides.core.merge import merge_group
from markup_overrides.core.models import ElementOverride

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class OverrideStore:
    """Append-only override history for one document, grouped by selector."""

    def __init__(self) -> None:
        self._overrides: dict[str, list[ElementOverride]] = {}

    def add(self, override: ElementOverride) -> ElementOverride:
        self._overrides.setdefault(override.selector, []).append(override)
        return override

    def merged(self, selector: str) -> ElementOverride | None:
        history = self._overrides.get(selector)
        if not history:
            return None
        return merge_group(selector, history)

    def by_selector(self, selector: str) -> list[ElementOverride]:
        return list(self._overrides.get(selector, []))

    def remove(self, selector: str, timestamp: float) -> bool:
        """Reverts the edits recorded for ``selector`` at ``timestamp``."""

        history = self._overrides.get(selector)
        if not history:
            return False
        remaining = [override for override in history if override.timestamp != timestamp]
        if remaining:
            self._overrides[selector] = remaining
        else:
            del self._overrides[selector]
        return len(remaining) < len(history)

    def all(self) -> list[ElementOverride]:
        flattened = [override for history in self._overrides.values() for override in history]
        return sorted(flattened, key=lambda override: override.timestamp)

    def clear(self) -> None:
        self._overrides.clear()

    def count(self) -> int:
        return sum(len(history) for history in self._overrides.values())

    def selectors(self) -> list[str]:
        return list(self._overrides)

    def has(self, selector: str) -> bool:
        return bool(self._overrides.get(selector))

    def __len__(self) -> int:
        return self.count()


class KeyedStore(Generic[K, V]):
    """Explicitly owned registry replacing process-wide lookup tables.

    Entries are created on first use through ``ensure`` and dropped through
    ``delete`` when their owner goes away.
    """

    def __init__(self, factory: Callable[[K], V] | None = None) -> None:
        self._entries: dict[K, V] = {}
        self._factory = factory

    def get(self, key: K) -> V | None:
        return self._entries.get(key)

    def set(self, key: K, value: V) -> None:
        self._entries[key] = value

    def delete(self, key: K) -> bool:
        if key not in self._entries:
            return False
        del self._entries[key]
        return True

    def ensure(self, key: K) -> V:
        if key not in self._entries:
            if self._factory is None:
                raise KeyError(key)
            self._entries[key] = self._factory(key)
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class ShapeSizeStore(KeyedStore[str, float]):
    """Measured content heights keyed by shape id."""

    def __init__(self, default_height: float = 0.0) -> None:
        super().__init__(factory=lambda _shape_id: default_height)

    def record(self, shape_id: str, height: float) -> None:
        if height < 0:
            raise ValueError("Measured height must not be negative")
        self.set(shape_id, height)
