"""Localization service: async locale switching over an atomic store.

LocalizationService sequences table loading through the catalog, loader,
and parser collaborators, installs complete locale sets into the store in
one step, and publishes changes to reactive observers.

Key architectural decisions:
- Readers (resolve, observe) only ever see installed snapshots
- Each locale switch is its own asyncio.Task; starting a new switch
  cancels the previous one, and a switch version guards the install
- Table loads for a switch run in one asyncio.TaskGroup: the first
  failure cancels its siblings and the switch installs nothing
- Cancellation is never reported as an error
- Protocol-based collaborators (dependency inversion)

Lifecycle:
    UNINITIALIZED -> INITIALIZING -> READY <-> SWITCHING_LOCALE
    any state -> DISPOSED (terminal)

    A failed initialize_async() returns to UNINITIALIZED; resolve() then
    returns diagnostic placeholders and initialize_async() may be retried.

Load Tracking:
    Each load pass records TableLoadResult objects. get_load_summary()
    returns the results of the most recent pass:

        await service.set_locale_async("ru-RU")
        summary = service.get_load_summary()
        if summary.has_errors:
            for result in summary.get_errors():
                print(result.locale, result.table, result.error)

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Self

from loctable.constants import MAX_REPORTED_MISSING_KEYS
from loctable.core.identifiers import LocaleId, TextKey, TextTableId
from loctable.diagnostics import (
    LoadFailureError,
    LocalizationDiagnostic,
    LocalizationError,
    ServiceStateError,
    TableParseError,
    UnsupportedLocaleError,
)
from loctable.enums import ErrorCode, LoadStatus, ServiceState
from loctable.localization.loading import (
    FallbackInfo,
    LoadSummary,
    LocaleStorage,
    MemoryLocaleStorage,
    TableCatalog,
    TableLoader,
    TableLoadResult,
)
from loctable.localization.parser import JsonTableParser, TableParser
from loctable.localization.policy import LocalizationPolicy
from loctable.localization.types import TextArgs
from loctable.runtime.formatter import format_template
from loctable.runtime.reactive import (
    Observable,
    ReactiveProperty,
    ReadOnlyReactiveProperty,
    Subject,
    Subscription,
    combine_latest,
)
from loctable.runtime.store import LoadedLocaleSet, LocalizationStore, TableCache, TextTable

__all__ = ["LocalizationService"]

logger = logging.getLogger(__name__)

_BUSY_STATES = frozenset({ServiceState.INITIALIZING, ServiceState.SWITCHING_LOCALE})
_ACTIVE_STATES = frozenset({ServiceState.READY, ServiceState.SWITCHING_LOCALE})


class LocalizationService:
    """Runtime-switchable localized text with reactive observation.

    Example:
        >>> catalog = StaticCatalog(locales=("en-US", "ru-RU"), tables=("UI",))
        >>> service = LocalizationService(catalog, PathTableLoader("assets/l10n"))
        >>> await service.initialize_async()
        True
        >>> service.resolve("UI", "Menu.Play")
        'Play'
        >>> subscription = service.observe("UI", "Menu.Play").subscribe(print)
        Play
        >>> await service.set_locale_async("ru-RU")
        Играть
        True

    Thread Safety:
        resolve() and observe() may be called from any thread. Lifecycle
        operations (initialize_async, set_locale_async, preload_async,
        dispose) belong to the event loop that runs them.
    """

    __slots__ = (
        "_cache",
        "_catalog",
        "_current_locale",
        "_errors",
        "_init_lock",
        "_is_busy",
        "_load_summary",
        "_loader",
        "_observations",
        "_observations_lock",
        "_on_fallback",
        "_parser",
        "_policy",
        "_reported_missing",
        "_revision",
        "_state",
        "_storage",
        "_store",
        "_switch_task",
        "_switch_version",
    )

    def __init__(
        self,
        catalog: TableCatalog,
        loader: TableLoader,
        parser: TableParser | None = None,
        storage: LocaleStorage | None = None,
        policy: LocalizationPolicy | None = None,
        *,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Create an uninitialized service.

        Args:
            catalog: Supported locales, startup tables, and addresses
            loader: Fetches raw payloads by address
            parser: Turns payloads into tables (default: JsonTableParser)
            storage: Persists the chosen locale (default: MemoryLocaleStorage)
            policy: Validation, fallback, and rendering decisions
                (default: LocalizationPolicy())
            on_fallback: Optional callback invoked when resolve() answers
                from the fallback locale. Receives a FallbackInfo.
        """
        self._catalog = catalog
        self._loader = loader
        self._parser: TableParser = parser if parser is not None else JsonTableParser()
        self._storage: LocaleStorage = storage if storage is not None else MemoryLocaleStorage()
        self._policy = policy if policy is not None else LocalizationPolicy()
        self._on_fallback = on_fallback

        self._store = LocalizationStore()
        self._cache = TableCache(self._policy.max_cached_tables)
        self._current_locale: ReactiveProperty[LocaleId | None] = ReactiveProperty(None)
        self._is_busy: ReactiveProperty[bool] = ReactiveProperty(False)
        self._errors: Subject[LocalizationDiagnostic] = Subject()
        # Bumped on every install; drives observe() recomputation.
        self._revision: ReactiveProperty[int] = ReactiveProperty(0)

        self._state = ServiceState.UNINITIALIZED
        self._init_lock = asyncio.Lock()
        self._switch_task: asyncio.Task[LoadedLocaleSet | None] | None = None
        self._switch_version = 0
        self._observations: set[Subscription] = set()
        self._observations_lock = threading.Lock()
        self._reported_missing: set[tuple[LocaleId | None, TextTableId, TextKey]] = set()
        self._load_summary = LoadSummary()

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def state(self) -> ServiceState:
        """Current lifecycle state."""
        return self._state

    @property
    def current_locale(self) -> ReadOnlyReactiveProperty[LocaleId | None]:
        """Installed locale (None before the first install)."""
        return self._current_locale

    @property
    def is_busy(self) -> ReadOnlyReactiveProperty[bool]:
        """True while initializing or switching locale."""
        return self._is_busy

    @property
    def errors(self) -> Observable[LocalizationDiagnostic]:
        """Stream of load, validation, and storage failures."""
        return self._errors

    @property
    def policy(self) -> LocalizationPolicy:
        """Policy in effect."""
        return self._policy

    @property
    def store(self) -> LocalizationStore:
        """Store holding the installed locale set."""
        return self._store

    def get_supported_locales(self) -> tuple[LocaleId, ...]:
        """Locales the catalog offers."""
        return tuple(self._catalog.supported_locales())

    def get_load_summary(self) -> LoadSummary:
        """Results of the most recent load pass.

        Returns:
            LoadSummary; empty before the first load
        """
        return self._load_summary

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        active = self._store.snapshot
        tables = len(active.tables) if active is not None else 0
        return (
            f"LocalizationService(state={self._state.value}, "
            f"locale={self._current_locale.value}, tables={tables})"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize_async(self) -> bool:
        """Load the persisted (or default) locale and become READY.

        The persisted locale is used when it is supported; otherwise the
        policy default. If the chosen locale cannot be loaded, the default
        locale is tried before giving up. Failures are published on
        ``errors``.

        Idempotent: returns True immediately once READY. Concurrent callers
        are serialized.

        Returns:
            True if a locale set was installed, False otherwise

        Raises:
            ServiceStateError: If the service is disposed
            asyncio.CancelledError: If the caller is cancelled
        """
        self._require_not_disposed()
        async with self._init_lock:
            self._require_not_disposed()
            if self._state in _ACTIVE_STATES:
                return True
            self._set_state(ServiceState.INITIALIZING)
            try:
                installed = await self._initialize()
            except asyncio.CancelledError:
                if self._state is ServiceState.INITIALIZING:
                    self._set_state(ServiceState.UNINITIALIZED)
                raise
            if self._state is ServiceState.DISPOSED:
                return False
            self._set_state(ServiceState.READY if installed else ServiceState.UNINITIALIZED)
            return installed

    async def _initialize(self) -> bool:
        try:
            supported = self.get_supported_locales()
            tables = self._policy.resolve_startup_tables(self._catalog)
        except Exception as e:
            self._publish(self._diagnose(e))
            logger.warning("Initialization failed: %s", e)
            return False

        saved = await self._load_saved_locale(supported)
        candidates = dict.fromkeys(
            locale for locale in (saved, self._policy.default_locale) if locale is not None
        )
        for locale in candidates:
            if self._state is ServiceState.DISPOSED:
                return False
            try:
                loaded = await self._load_locale_set(locale, tables)
            except ExceptionGroup as group_error:
                self._publish_failures(group_error, locale)
                logger.warning("Initialization with locale '%s' failed", locale)
                continue
            if self._state is ServiceState.DISPOSED:
                return False
            self._install(loaded)
            return True

        logger.warning("Initialization failed: no locale could be loaded")
        return False

    async def _load_saved_locale(self, supported: tuple[LocaleId, ...]) -> LocaleId | None:
        try:
            saved = await self._storage.load()
        except Exception as e:
            self._publish(
                LocalizationDiagnostic(
                    ErrorCode.STORAGE_FAILED, f"Failed to load saved locale: {e}", error=e
                )
            )
            logger.warning("Failed to load saved locale: %s", e)
            return None
        if saved is None:
            return None
        try:
            self._policy.validate_locale(saved, supported)
        except UnsupportedLocaleError as e:
            self._publish(self._diagnose(e, saved))
            logger.warning("Saved locale '%s' is not supported; using default", saved)
            return None
        return saved

    async def set_locale_async(self, locale: LocaleId | str) -> bool:
        """Switch to locale.

        Any in-flight switch is cancelled first; only the most recent
        switch can install. All required tables (startup tables plus any
        currently installed ones) for the locale and its fallback must
        load, or nothing changes. On success the new locale is persisted;
        a persistence failure is published but keeps the install.

        Args:
            locale: Target locale

        Returns:
            True if the locale was installed; False if this switch was
            superseded, the service was disposed, or loading failed

        Raises:
            ServiceStateError: If the service is not initialized or disposed
            UnsupportedLocaleError: If locale is not supported
            asyncio.CancelledError: If the caller is cancelled (the switch
                is cancelled with it)
        """
        self._require_active("set_locale_async")
        target = _as_locale(locale)
        self._validate_supported(target)

        previous = self._switch_task
        if previous is not None and not previous.done():
            logger.debug("Superseding in-flight locale switch")
            previous.cancel()

        self._switch_version += 1
        version = self._switch_version
        task = asyncio.create_task(self._run_switch(target, version), name=f"locale-switch-{target}")
        task.add_done_callback(self._on_switch_done)
        self._switch_task = task
        self._set_state(ServiceState.SWITCHING_LOCALE)

        try:
            installed = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                task.cancel()
                raise
            logger.debug("Locale switch to '%s' was superseded", target)
            return False

        if installed is None:
            return False
        await self._persist(installed.locale)
        return True

    async def _run_switch(self, locale: LocaleId, version: int) -> LoadedLocaleSet | None:
        try:
            tables = self._required_tables()
        except Exception as e:
            self._publish(self._diagnose(e, locale))
            return None

        try:
            loaded = await self._load_locale_set(locale, tables)
        except ExceptionGroup as group_error:
            if version == self._switch_version:
                self._publish_failures(group_error, locale)
            logger.warning("Locale switch to '%s' failed; keeping current locale", locale)
            return None

        if version != self._switch_version or self._state is ServiceState.DISPOSED:
            return None
        self._install(loaded)
        return loaded

    def _on_switch_done(self, task: asyncio.Task[LoadedLocaleSet | None]) -> None:
        if task is not self._switch_task:
            return
        self._switch_task = None
        if self._state is ServiceState.SWITCHING_LOCALE:
            self._set_state(ServiceState.READY)

    async def preload_async(
        self,
        tables: Iterable[TextTableId | str],
        locale: LocaleId | str | None = None,
    ) -> bool:
        """Load additional tables ahead of use.

        For the active locale (the default), the tables are loaded with
        their fallback and merged into the installed set in one step.
        For any other locale they only warm the table cache, so a later
        switch to that locale does not need to fetch them.

        Args:
            tables: Tables to load
            locale: Target locale (default: the active locale)

        Returns:
            True if every table loaded (and, for the active locale, was
            installed); False on failure or if a switch intervened

        Raises:
            ServiceStateError: If the service is not initialized or disposed
            UnsupportedLocaleError: If locale is not supported
        """
        self._require_active("preload_async")
        table_ids = tuple(dict.fromkeys(_as_table(table) for table in tables))
        active = self._store.snapshot
        target = _as_locale(locale) if locale is not None else None
        if target is None:
            if active is None:
                return False
            target = active.locale
        else:
            self._validate_supported(target)

        if active is None or target != active.locale:
            try:
                await self._load_locale_set(target, table_ids)
            except ExceptionGroup as group_error:
                self._publish_failures(group_error, target)
                return False
            logger.debug("Preloaded %d tables for '%s'", len(table_ids), target)
            return True

        version = self._switch_version
        required = tuple(dict.fromkeys((*active.tables, *table_ids)))
        try:
            loaded = await self._load_locale_set(target, required)
        except ExceptionGroup as group_error:
            self._publish_failures(group_error, target)
            return False
        if version != self._switch_version or self._store.snapshot is not active:
            logger.debug("Preload for '%s' superseded by a locale change", target)
            return False
        self._install(loaded)
        return True

    def dispose(self) -> None:
        """Shut the service down. Idempotent.

        Cancels any in-flight switch, releases observe() subscriptions,
        clears the store and cache, and completes the reactive streams.
        """
        if self._state is ServiceState.DISPOSED:
            return
        self._set_state(ServiceState.DISPOSED)
        self._switch_version += 1
        task = self._switch_task
        if task is not None and not task.done():
            task.cancel()

        with self._observations_lock:
            observations = tuple(self._observations)
            self._observations.clear()
        for subscription in observations:
            subscription.dispose()

        self._store.clear()
        self._cache.clear()
        self._reported_missing.clear()
        self._current_locale.dispose()
        self._is_busy.dispose()
        self._revision.dispose()
        self._errors.dispose()
        logger.info("LocalizationService disposed")

    async def aclose(self) -> None:
        """Dispose and wait for the cancelled switch to finish unwinding."""
        task = self._switch_task
        self.dispose()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(
        self,
        table: TextTableId | str,
        key: TextKey | str,
        args: TextArgs | None = None,
    ) -> str:
        """Resolve (table, key) to formatted text for the installed locale.

        Never blocks and never raises for missing content: a key missing
        from both the active and fallback locale renders as
        ``[table.key]`` (or "" when the policy disables placeholders).

        Args:
            table: Table identifier or name
            key: Key identifier or text
            args: Named arguments for the template (optional)

        Returns:
            Formatted text

        Raises:
            ValueError: If table or key is blank
        """
        table_id = _as_table(table)
        text_key = _as_key(key)
        active = self._store.snapshot
        if active is None:
            self._report_missing(None, table_id, text_key)
            return self._policy.missing_text(table_id, text_key)

        entry = active.find(table_id, text_key)
        if entry is None:
            self._report_missing(active.locale, table_id, text_key)
            return self._policy.missing_text(table_id, text_key)

        answered_locale, template = entry
        if answered_locale != active.locale and self._on_fallback is not None:
            self._on_fallback(FallbackInfo(active.locale, answered_locale, table_id, text_key))
        return format_template(template, args, active.locale)

    def observe(
        self,
        table: TextTableId | str,
        key: TextKey | str,
        args: TextArgs | Observable[TextArgs | None] | None = None,
    ) -> Observable[str]:
        """Live text for (table, key).

        Each subscriber receives the current text immediately, then the
        recomputed text whenever a locale set is installed or (for an
        observable ``args``) new arguments arrive. Text equal to the last
        value delivered to that subscriber is not repeated. Subscriptions are
        released by dispose() on the service. Subscribing after disposal
        delivers the placeholder once.

        Args:
            table: Table identifier or name
            key: Key identifier or text
            args: Static arguments, or an Observable of argument mappings

        Returns:
            Observable of resolved text
        """
        table_id = _as_table(table)
        text_key = _as_key(key)
        args_stream: Observable[TextArgs | None] = (
            args if isinstance(args, Observable) else Observable.of(args)
        )

        def subscribe(observer: Callable[[str], None]) -> Subscription:
            if self._state is ServiceState.DISPOSED:
                observer(self._policy.missing_text(table_id, text_key))
                released = Subscription()
                released.dispose()
                return released

            last_emitted: str | None = None

            def on_change(pair: tuple[int, TextArgs | None]) -> None:
                nonlocal last_emitted
                text = self.resolve(table_id, text_key, pair[1])
                if text == last_emitted:
                    return
                last_emitted = text
                observer(text)

            inner = combine_latest(self._revision, args_stream, second_seed=None).subscribe(
                on_change
            )

            def release() -> None:
                inner.dispose()
                with self._observations_lock:
                    self._observations.discard(subscription)

            subscription = Subscription(release)
            with self._observations_lock:
                self._observations.add(subscription)
            # dispose() may have drained the set while this one was being built
            if self._state is ServiceState.DISPOSED:
                subscription.dispose()
            return subscription

        return Observable(subscribe)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _required_tables(self) -> tuple[TextTableId, ...]:
        startup = self._policy.resolve_startup_tables(self._catalog)
        active = self._store.snapshot
        installed = tuple(active.tables) if active is not None else ()
        return tuple(dict.fromkeys((*startup, *installed)))

    async def _load_locale_set(
        self, locale: LocaleId, tables: tuple[TextTableId, ...]
    ) -> LoadedLocaleSet:
        """Load tables for locale and its fallback, all or nothing.

        Raises:
            ExceptionGroup: With one exception per failed table
            asyncio.CancelledError: If the calling task is cancelled
        """
        fallback = self._policy.fallback_for(locale)
        pairs = [(locale, table) for table in tables]
        if fallback is not None:
            pairs.extend((fallback, table) for table in tables)

        # Recorded on completion or failure only; a cancelled pass keeps the
        # previous summary.
        results: list[TableLoadResult] = []
        try:
            async with asyncio.TaskGroup() as group:
                tasks = {
                    pair: group.create_task(self._load_table(*pair, results)) for pair in pairs
                }
        except ExceptionGroup:
            self._load_summary = LoadSummary.from_results(results)
            raise
        self._load_summary = LoadSummary.from_results(results)

        loaded = {pair: task.result() for pair, task in tasks.items()}
        fallback_set = (
            LoadedLocaleSet(fallback, {t: loaded[(fallback, t)] for t in tables})
            if fallback is not None
            else None
        )
        return LoadedLocaleSet(locale, {t: loaded[(locale, t)] for t in tables}, fallback_set)

    async def _load_table(
        self,
        locale: LocaleId,
        table: TextTableId,
        results: list[TableLoadResult],
    ) -> TextTable:
        """Fetch and parse one table, reusing installed or cached copies.

        Raises:
            LoadFailureError: If the catalog or loader fails
            TableParseError: If the payload is unusable
        """
        reused = self._find_installed(locale, table) or self._cache.get(locale, table)
        if reused is not None:
            logger.debug("Table '%s' for '%s' served from memory", table, locale)
            results.append(
                TableLoadResult(locale, table, LoadStatus.CACHED, entry_count=len(reused))
            )
            return reused

        address = ""
        try:
            address = self._catalog.address_for(locale, table)
            payload = await self._loader.load_bytes(address)
            text_table = self._parser.parse_table(payload, locale, table)
        except FileNotFoundError as e:
            results.append(TableLoadResult(locale, table, LoadStatus.NOT_FOUND, e, address))
            msg = f"Table '{table}' for '{locale}' not found at '{address}'"
            raise LoadFailureError(msg, locale=locale, table=table, address=address) from e
        except TableParseError as e:
            results.append(TableLoadResult(locale, table, LoadStatus.ERROR, e, address))
            raise TableParseError(str(e), locale=locale, table=table, address=address) from e
        except (KeyError, LoadFailureError, OSError, ValueError) as e:
            results.append(TableLoadResult(locale, table, LoadStatus.ERROR, e, address))
            msg = f"Failed to load table '{table}' for '{locale}': {e}"
            raise LoadFailureError(msg, locale=locale, table=table, address=address) from e

        self._cache.put(text_table)
        results.append(
            TableLoadResult(locale, table, LoadStatus.SUCCESS, None, address, len(text_table))
        )
        return text_table

    def _find_installed(self, locale: LocaleId, table: TextTableId) -> TextTable | None:
        active = self._store.snapshot
        while active is not None:
            if active.locale == locale:
                return active.tables.get(table)
            active = active.fallback
        return None

    def _install(self, loaded: LoadedLocaleSet) -> None:
        self._store.replace(loaded)
        self._revision.set_value(self._revision.value + 1)
        self._current_locale.set_value(loaded.locale)
        logger.info(
            "Installed locale '%s' with %d tables (fallback: %s)",
            loaded.locale,
            len(loaded.tables),
            loaded.fallback.locale if loaded.fallback is not None else None,
        )

    async def _persist(self, locale: LocaleId) -> None:
        try:
            await self._storage.save(locale)
        except Exception as e:
            self._publish(
                LocalizationDiagnostic(
                    ErrorCode.STORAGE_FAILED,
                    f"Failed to save locale '{locale}': {e}",
                    locale=locale,
                    error=e,
                )
            )
            logger.warning("Failed to save locale '%s': %s", locale, e)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _validate_supported(self, locale: LocaleId) -> None:
        try:
            self._policy.validate_locale(locale, self.get_supported_locales())
        except UnsupportedLocaleError as e:
            self._publish(self._diagnose(e, locale))
            raise

    def _publish(self, diagnostic: LocalizationDiagnostic) -> None:
        self._errors.on_next(diagnostic)

    def _publish_failures(self, group_error: ExceptionGroup, locale: LocaleId) -> None:
        for error in group_error.exceptions:
            self._publish(self._diagnose(error, locale))

    @staticmethod
    def _diagnose(error: BaseException, locale: LocaleId | None = None) -> LocalizationDiagnostic:
        if isinstance(error, LocalizationError) and error.diagnostic is not None:
            return error.diagnostic
        match error:
            case UnsupportedLocaleError():
                return LocalizationDiagnostic(
                    ErrorCode.UNSUPPORTED_LOCALE, str(error), locale=error.locale, error=error
                )
            case TableParseError():
                code = ErrorCode.PARSE_FAILED
            case LoadFailureError():
                code = ErrorCode.LOAD_FAILED
            case _:
                return LocalizationDiagnostic(
                    ErrorCode.UNKNOWN, str(error) or type(error).__name__, locale=locale, error=error
                )
        return LocalizationDiagnostic(
            code, str(error), locale=error.locale or locale, table=error.table, error=error
        )

    def _report_missing(self, locale: LocaleId | None, table: TextTableId, key: TextKey) -> None:
        marker = (locale, table, key)
        if marker in self._reported_missing:
            return
        if len(self._reported_missing) >= MAX_REPORTED_MISSING_KEYS:
            self._reported_missing.clear()
        self._reported_missing.add(marker)
        logger.warning("Missing text '%s.%s' for locale '%s'", table, key, locale)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _set_state(self, state: ServiceState) -> None:
        if state is self._state:
            return
        logger.debug("LocalizationService state %s -> %s", self._state, state)
        self._state = state
        self._is_busy.set_value(state in _BUSY_STATES)

    def _require_not_disposed(self) -> None:
        if self._state is ServiceState.DISPOSED:
            msg = "LocalizationService is disposed"
            raise ServiceStateError(msg)

    def _require_active(self, operation: str) -> None:
        self._require_not_disposed()
        if self._state not in _ACTIVE_STATES:
            msg = f"{operation}() requires an initialized service, state is '{self._state}'"
            raise ServiceStateError(msg)


def _as_locale(value: LocaleId | str) -> LocaleId:
    return value if isinstance(value, LocaleId) else LocaleId(value)


def _as_table(value: TextTableId | str) -> TextTableId:
    return value if isinstance(value, TextTableId) else TextTableId(value)


def _as_key(value: TextKey | str) -> TextKey:
    return value if isinstance(value, TextKey) else TextKey(value)
