"""Page element generators and plugin discovery."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Callable, Dict, List, Sequence

from ..logging import get_logger
from .base import PageElement, language_set
from .html import HtmlPageElement

ENTRY_POINT_GROUP = "docpress.generators"

logger = get_logger("generators")


class GeneratorLoadError(RuntimeError):
    """A generator plugin could not be turned into a usable page element."""


@dataclass(frozen=True)
class GeneratorSource:
    """Where a generator comes from and how to build it."""

    name: str
    origin: str
    factory: Callable[[], object]

    @property
    def key(self) -> str:
        return self.name.strip().lower()


def available_sources(templates_dir: Path | None = None) -> List[GeneratorSource]:
    """Built-in generators first, then installed plugins, one source per identity.

    Identities compare case-insensitively, as in the registry. A plugin whose
    name is already taken is skipped with a warning instead of failing the
    whole build at registration time.
    """
    sources: Dict[str, GeneratorSource] = {}
    candidates = [GeneratorSource("html", "builtin", lambda: HtmlPageElement(templates_dir))]
    for entry in metadata.entry_points(group=ENTRY_POINT_GROUP):
        candidates.append(GeneratorSource(entry.name, _origin(entry), _plugin_factory(entry)))

    for source in candidates:
        taken = sources.get(source.key)
        if taken is not None:
            logger.warning(
                "Ignoring generator %r from %s: name already provided by %s",
                source.name,
                source.origin,
                taken.origin,
            )
            continue
        sources[source.key] = source
    return list(sources.values())


def discover_generators(
    enabled: Sequence[str] | None = None,
    *,
    templates_dir: Path | None = None,
) -> List[PageElement]:
    """Instantiate generators in registration order.

    ``enabled`` restricts the result to the named generators; naming one that
    is not installed raises ``ValueError``.
    """
    sources = available_sources(templates_dir)
    if enabled is not None:
        wanted = {name.strip().lower() for name in enabled}
        missing = wanted - {source.key for source in sources}
        if missing:
            raise ValueError(f"Unknown generators requested: {', '.join(sorted(missing))}")
        sources = [source for source in sources if source.key in wanted]

    generators = [_instantiate(source) for source in sources]
    logger.debug("Discovered generators: %s", ", ".join(generator.name for generator in generators))
    return generators


def _instantiate(source: GeneratorSource) -> PageElement:
    instance = source.factory()
    if isinstance(instance, type) and issubclass(instance, PageElement):
        instance = instance()
    if not isinstance(instance, PageElement):
        raise GeneratorLoadError(
            f"Generator {source.name!r} from {source.origin} is not a PageElement "
            f"(got {type(instance).__name__})"
        )
    if (instance.name or "").strip().lower() != source.key:
        raise GeneratorLoadError(
            f"Generator {source.name!r} from {source.origin} identifies itself as {instance.name!r}"
        )
    if not instance.languages:
        raise GeneratorLoadError(f"Generator {source.name!r} from {source.origin} supports no output language")
    return instance


def _plugin_factory(entry: metadata.EntryPoint) -> Callable[[], object]:
    def factory() -> object:
        try:
            loaded = entry.load()
        except Exception as exc:
            raise GeneratorLoadError(f"Failed to load generator plugin {entry.name!r}: {exc}") from exc
        # Entry points may name an instance, a PageElement class or a factory.
        if isinstance(loaded, PageElement) or isinstance(loaded, type):
            return loaded
        return loaded() if callable(loaded) else loaded

    return factory


def _origin(entry: metadata.EntryPoint) -> str:
    dist = getattr(entry, "dist", None)
    return f"plugin {dist.name}" if dist is not None else f"plugin {getattr(entry, 'value', entry.name)}"


__all__ = [
    "ENTRY_POINT_GROUP",
    "GeneratorLoadError",
    "GeneratorSource",
    "HtmlPageElement",
    "PageElement",
    "available_sources",
    "discover_generators",
    "language_set",
]
