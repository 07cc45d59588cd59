"""Registry of installed page element generators."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List, Tuple

from .generators.base import PageElement
from .logging import get_logger
from .models import OutputLanguage, SymbolKind


class DuplicateGeneratorError(RuntimeError):
    """Raised when a generator with the same identity is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Generator '{name}' is already registered")
        self.name = name


class RegistryBusyError(RuntimeError):
    """Raised when the generator set is mutated while a batch is running."""


class GeneratorRegistry:
    """Tracks generators in registration order and answers capability queries.

    Capability is evaluated per call from each generator's own flags; the
    generator set is small and changes only at load time.
    """

    def __init__(self) -> None:
        self._entries: Tuple[PageElement, ...] = ()
        self._lock = threading.Lock()
        self._active_batches = 0
        self.logger = get_logger("registry")

    def register(self, generator: PageElement) -> None:
        if not isinstance(generator, PageElement):
            raise TypeError(f"Expected a PageElement, got {type(generator).__name__}")
        key = _identity(generator)
        if not key:
            raise ValueError(f"Generator {generator!r} has no name")
        with self._lock:
            self._ensure_idle("register")
            if any(_identity(existing) == key for existing in self._entries):
                raise DuplicateGeneratorError(generator.name)
            self._entries = self._entries + (generator,)
        self.logger.debug("Registered generator %s", generator.name)

    def unregister(self, name: str) -> None:
        """Remove the generator called ``name``; unknown names are ignored."""
        key = name.lower()
        with self._lock:
            self._ensure_idle("unregister")
            remaining = tuple(entry for entry in self._entries if _identity(entry) != key)
            if len(remaining) != len(self._entries):
                self.logger.debug("Unregistered generator %s", name)
            self._entries = remaining

    def find_capable(
        self,
        kind: SymbolKind,
        language: OutputLanguage,
        on_error: Callable[[PageElement, Exception], None] | None = None,
    ) -> List[PageElement]:
        """Return generators supporting ``kind`` and ``language`` in registration order.

        Capability checks are plugin code. With ``on_error`` set, a check that
        raises is reported there and the generator is treated as not capable;
        without it the exception propagates.
        """
        capable: List[PageElement] = []
        for generator in self._entries:
            try:
                supported = generator.supports_language(language) and generator.supports_kind(kind)
            except Exception as exc:
                if on_error is None:
                    raise
                on_error(generator, exc)
                continue
            if supported:
                capable.append(generator)
        return capable

    def get(self, name: str) -> PageElement | None:
        key = name.lower()
        return next((entry for entry in self._entries if _identity(entry) == key), None)

    @property
    def generators(self) -> Tuple[PageElement, ...]:
        return self._entries

    @property
    def batch_active(self) -> bool:
        return self._active_batches > 0

    @contextmanager
    def batch(self) -> Iterator["GeneratorRegistry"]:
        """Hold the generator set fixed for the duration of a batch."""
        with self._lock:
            self._active_batches += 1
        try:
            yield self
        finally:
            with self._lock:
                self._active_batches -= 1

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def _ensure_idle(self, action: str) -> None:
        if self._active_batches:
            raise RegistryBusyError(f"Cannot {action} generators while a batch is running")


def _identity(generator: PageElement) -> str:
    return (generator.name or "").strip().lower()


__all__ = ["DuplicateGeneratorError", "GeneratorRegistry", "RegistryBusyError"]
