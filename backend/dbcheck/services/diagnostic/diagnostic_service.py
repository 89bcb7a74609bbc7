from __future__ import annotations
import logging
import time
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor, wait
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from dbcheck.constants.catalog import DEFAULT_CATALOG
from dbcheck.core.config import Settings
from dbcheck.core.errors import FatalConfigurationError
from dbcheck.db.store import DiagnosticStore, SqlStore

# Models
from dbcheck.services.diagnostic.models.model import (
    Catalog,
    DiagnosticReport,
    QuickHealth,
    TableHealth,
    TableInspection,
)

# Utils
from dbcheck.services.diagnostic.utils.sampler import inspect_table
from dbcheck.services.diagnostic.utils.consistency import check_orphans, check_profile_links
from dbcheck.services.diagnostic.utils.recommend import recommend

logger = logging.getLogger(__name__)

MSG_READY = "Database is ready!"
MSG_EMPTY = "Database is empty. Please add users to get started."

Check = Callable[[Mapping[str, TableHealth]], List[str]]

def _remaining(deadline: Optional[float]) -> Optional[float]:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())

def _health_of(future: Future) -> TableHealth:
    if future.cancelled() or not future.done() or future.exception() is not None:
        return TableHealth.missing()
    return future.result().health

def _settle_probe(probed: Future, task: Future) -> None:
    """Resolve a probe future whose task ended without publishing a count."""
    if probed.done():
        return
    if task.cancelled():
        probed.cancel()
        probed.set_running_or_notify_cancel()
    elif task.exception() is not None:
        probed.set_exception(task.exception())

def _run_after(deps: Mapping[str, Future], deadline: Optional[float], check: Check) -> List[str]:
    """Wait for the probes a check depends on, then run it on their results."""
    _, pending = wait(list(deps.values()), timeout=_remaining(deadline))
    if pending:
        raise FuturesTimeoutError("dependent probes did not finish before the deadline")
    return check({name: _health_of(f) for name, f in deps.items()})


class DiagnosticEngine:
    """Runs table probes, consistency checks and recommendations against one store.

    Each run builds a fresh DiagnosticReport; the engine holds no per-run state.
    """

    def __init__(
        self,
        store: Optional[DiagnosticStore],
        settings: Optional[Settings] = None,
        catalog: Catalog = DEFAULT_CATALOG,
        *,
        config_error: Optional[str] = None,
    ):
        self.store = store
        self.settings = settings or Settings()
        self.catalog = catalog
        self._config_error = config_error

    @classmethod
    def from_settings(cls, settings: Settings, catalog: Catalog = DEFAULT_CATALOG) -> "DiagnosticEngine":
        try:
            store = SqlStore.from_settings(settings, catalog)
        except FatalConfigurationError as e:
            logger.error("Diagnostic store unavailable: %s", e)
            return cls(None, settings, catalog, config_error=str(e))
        return cls(store, settings, catalog)

    def require_store(self) -> DiagnosticStore:
        if self.store is None:
            raise FatalConfigurationError(self._config_error or "No database store configured.")
        return self.store

    # --------------------- Full run --------------------- #

    def run_diagnostic(self, timeout: Optional[float] = None) -> DiagnosticReport:
        """Inspect every catalog table and return an aggregated report.

        `timeout` (seconds) overrides DIAGNOSTIC_TIMEOUT_S. Tables whose probe
        has not finished by then are reported missing with a cancellation
        issue; tables whose count finished but whose sample did not keep the
        count with an empty sample. The report is still complete.
        """
        store = self.require_store()
        catalog = self.catalog
        limit = timeout if timeout is not None else self.settings.DIAGNOSTIC_TIMEOUT_S
        deadline = None if limit is None else time.monotonic() + limit
        started = time.monotonic()
        logger.info("Starting database diagnostic over %d table(s)", len(catalog.tables))

        probe_pool = ThreadPoolExecutor(
            max_workers=self.settings.PROBE_WORKERS or max(1, len(catalog.tables)),
            thread_name_prefix="dbcheck-probe",
        )
        check_pool = ThreadPoolExecutor(
            max_workers=len(catalog.relations) + 1,
            thread_name_prefix="dbcheck-check",
        )
        try:
            probe_futures: Dict[str, Future] = {name: Future() for name in catalog.tables}
            table_futures: Dict[str, Future] = {}
            for name in catalog.tables:
                task = probe_pool.submit(inspect_table, store, name, probe_futures[name])
                task.add_done_callback(lambda t, p=probe_futures[name]: _settle_probe(p, t))
                table_futures[name] = task

            def deps(names: Sequence[str]) -> Dict[str, Future]:
                return {n: probe_futures[n] for n in names}

            check_futures: List[Tuple[str, Future]] = []
            for rel in catalog.relations:
                check_futures.append((
                    f"orphans: {rel.label}",
                    check_pool.submit(
                        _run_after,
                        deps((rel.child, rel.parent)),
                        deadline,
                        lambda tables, rel=rel: check_orphans(store, rel, tables),
                    ),
                ))
            check_futures.append((
                "profile links",
                check_pool.submit(
                    _run_after,
                    deps(catalog.profile_tables()),
                    deadline,
                    lambda tables: check_profile_links(store, catalog, tables),
                ),
            ))

            _, pending = wait(
                [*table_futures.values(), *(f for _, f in check_futures)],
                timeout=_remaining(deadline),
            )
            if pending:
                logger.warning("Diagnostic deadline reached with %d task(s) unfinished", len(pending))
        finally:
            probe_pool.shutdown(wait=False, cancel_futures=True)
            check_pool.shutdown(wait=False, cancel_futures=True)

        tables: Dict[str, TableHealth] = {}
        issues: List[str] = []
        for name in catalog.tables:
            inspection = self._collect_table(name, table_futures[name], probe_futures[name])
            tables[name] = inspection.health
            issues.extend(inspection.issues)
        for label, future in check_futures:
            issues.extend(self._collect_check(label, future))

        report = DiagnosticReport(
            tables=tables,
            issues=tuple(issues),
            recommendations=tuple(recommend(tables, issues, catalog)),
        )
        logger.info(
            "Diagnostic finished in %d ms: %d/%d tables active, %d issue(s), %d recommendation(s)",
            int((time.monotonic() - started) * 1000),
            report.active_tables, report.total_tables,
            len(report.issues), len(report.recommendations),
        )
        return report

    @staticmethod
    def _collect_table(name: str, future: Future, probed: Future) -> TableInspection:
        if future.cancelled() or not future.done():
            if probed.done() and not probed.cancelled() and probed.exception() is None:
                inspection = probed.result()
                if inspection.health.exists:
                    logger.warning("Sample for table %r did not finish before the deadline", name)
                return inspection
            logger.warning("Probe for table %r cancelled", name)
            return TableInspection(
                table=name,
                health=TableHealth.missing(),
                issues=(f"Probe for table '{name}' was cancelled before completing",),
            )
        exc = future.exception()
        if exc is not None:
            logger.error("Unexpected error inspecting table %r", name, exc_info=exc)
            return TableInspection(
                table=name,
                health=TableHealth.missing(),
                issues=(f"Error checking table '{name}': {exc}",),
            )
        return future.result()

    @staticmethod
    def _collect_check(label: str, future: Future) -> List[str]:
        if future.cancelled() or not future.done():
            logger.warning("Consistency check %r cancelled", label)
            return [f"Consistency check '{label}' was cancelled before completing"]
        exc = future.exception()
        if isinstance(exc, (FuturesTimeoutError, CancelledError)):
            logger.warning("Consistency check %r cancelled", label)
            return [f"Consistency check '{label}' was cancelled before completing"]
        if exc is not None:
            logger.error("Unexpected error in consistency check %r", label, exc_info=exc)
            return [f"Consistency check '{label}' failed: {exc}"]
        return future.result()

    # --------------------- Quick check --------------------- #

    def quick_check(self, timeout: Optional[float] = None) -> QuickHealth:
        """Cheap liveness probe: can the users table be read, and does it have rows?"""
        store = self.require_store()
        limit = timeout if timeout is not None else self.settings.QUICK_CHECK_TIMEOUT_S

        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dbcheck-quick")
        try:
            future = pool.submit(store.sample, self.catalog.users_table, 1)
            try:
                rows = future.result(timeout=limit)
            except FuturesTimeoutError:
                logger.warning("Quick check timed out after %ss", limit)
                return QuickHealth(ready=False, message=f"Database connection issue: no response within {limit:g}s")
            except Exception as e:
                logger.warning("Quick check failed: %s", e)
                return QuickHealth(ready=False, message=f"Database connection issue: {e}")
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        if not rows:
            return QuickHealth(ready=False, message=MSG_EMPTY)
        return QuickHealth(ready=True, message=MSG_READY)
