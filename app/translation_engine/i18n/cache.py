"""Namespace loading and caching.

Tracks which (locale, namespace) pairs are resident, fetches missing
non-default data through a TranslationLoader and registers it. Concurrent
requests for the same pair share a single in-flight fetch.
"""

import asyncio
from functools import partial
from typing import Dict, Iterable, Mapping, Optional, Set, Tuple

from translation_engine.i18n.exceptions import NamespaceLoadError
from translation_engine.i18n.loader import TranslationLoader
from translation_engine.i18n.registry import TranslationRegistry
from translation_engine.logging import get_module_logger

logger = get_module_logger()

NamespaceKey = Tuple[str, str]


class NamespaceCache:
    """Ensures translation namespaces are loaded into a registry.

    The loaded marker set only avoids redundant loads; the registry never
    consults it. Loads never raise: a failed fetch is logged and lookups
    fall through to default-locale data.

    Attributes:
        registry: Registry fed with loaded documents.
        loader: Loader used for non-default locales.
        default_locale: Locale whose data is assumed pre-resident.
    """

    def __init__(
        self,
        registry: TranslationRegistry,
        loader: TranslationLoader,
        default_locale: Optional[str] = None,
    ):
        self.registry = registry
        self.loader = loader
        self.default_locale = default_locale or registry.default_locale
        self._loaded: Set[NamespaceKey] = set()
        self._in_flight: Dict[NamespaceKey, asyncio.Task] = {}

    @property
    def loaded(self) -> frozenset:
        """Snapshot of the loaded (locale, namespace) pairs."""
        return frozenset(self._loaded)

    def is_loaded(self, locale: str, namespace: str) -> bool:
        return (locale, namespace) in self._loaded

    def mark_loaded(self, locale: str, namespace: str) -> None:
        self._loaded.add((locale, namespace))

    def invalidate(self, locale: str, namespace: Optional[str] = None) -> None:
        """Forget loaded markers so the next ensure call re-fetches.

        Registered data stays resident until the re-fetch replaces it. The
        loader is told to drop its own copy as well.

        Args:
            locale: Locale to invalidate.
            namespace: Single namespace, or None for every namespace of locale.
        """
        if namespace is None:
            self._loaded = {key for key in self._loaded if key[0] != locale}
        else:
            self._loaded.discard((locale, namespace))
        self.loader.invalidate(locale, namespace)
        logger.info("namespace_invalidated", locale=locale, namespace=namespace)

    async def ensure_namespace(self, locale: str, namespace: str) -> None:
        """Make sure a namespace is resident for a locale.

        Default-locale namespaces are marked loaded without fetching. Other
        locales are fetched once; callers arriving while a fetch is running
        await the same fetch.

        Args:
            locale: Locale code.
            namespace: Namespace name.
        """
        key = (locale, namespace)
        if key in self._loaded:
            return

        if locale == self.default_locale:
            self._loaded.add(key)
            return

        task = self._in_flight.get(key)
        if task is None or task.done():
            task = asyncio.get_running_loop().create_task(self._fetch(locale, namespace))
            self._in_flight[key] = task
            task.add_done_callback(partial(self._forget_in_flight, key))

        # A cancelled waiter must not cancel the shared fetch
        await asyncio.shield(task)

    async def ensure_namespaces(self, locale: str, namespaces: Iterable[str]) -> None:
        """Ensure several namespaces concurrently.

        Completes when every load has settled; one failure does not abort
        the others.
        """
        results = await asyncio.gather(
            *(self.ensure_namespace(locale, namespace) for namespace in namespaces),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException) and not isinstance(
                result, asyncio.CancelledError
            ):
                logger.error("namespace_ensure_failed", locale=locale, error=str(result))

    async def reload_namespace(self, locale: str, namespace: str) -> None:
        """Re-fetch a namespace, replacing its data wholesale on success."""
        self.invalidate(locale, namespace)
        await self.ensure_namespace(locale, namespace)

    def _forget_in_flight(self, key: NamespaceKey, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _fetch(self, locale: str, namespace: str) -> None:
        try:
            tree = await self.loader.load(locale, namespace)
            if not isinstance(tree, Mapping):
                raise NamespaceLoadError(locale, namespace, "document is not a mapping")
        except Exception as e:
            logger.warning(
                "namespace_load_failed",
                locale=locale,
                namespace=namespace,
                fallback_locale=self.default_locale,
                error=str(e),
            )
            self._loaded.add((self.default_locale, namespace))
            return

        self.registry.add_namespace(locale, namespace, tree)
        self._loaded.add((locale, namespace))
        logger.info("namespace_loaded", locale=locale, namespace=namespace)
