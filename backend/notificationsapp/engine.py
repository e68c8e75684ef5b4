"""
Trigger scan pipeline.

For every active owner with enabled triggers the engine walks each enabled
trigger over every order, renders the alert for matches, resolves who gets it
and writes one notification per user unless the same (user, trigger, title)
was already written inside the dedup window.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from django.core.cache import cache
from django.utils import timezone

from .adapters import (
    DjangoNotificationSink, DjangoPolicyStore, DjangoRecordProvider,
    NotificationDraft, NotificationSink, PolicyStore, RecordProvider,
)
from .conditions import evaluate
from .conf import notification_setting
from .recipients import resolve_recipients
from .records import UserRecord
from .templating import render_template

logger = logging.getLogger(__name__)


@dataclass
class ScanReport:
    started_at: datetime
    accounts_scanned: int = 0
    accounts_failed: List[str] = field(default_factory=list)
    created: int = 0
    suppressed: int = 0
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return not self.accounts_failed

    def as_dict(self) -> dict:
        return {
            "started_at": self.started_at.isoformat(),
            "accounts_scanned": self.accounts_scanned,
            "accounts_failed": list(self.accounts_failed),
            "created": self.created,
            "suppressed": self.suppressed,
            "skipped": self.skipped,
        }


class DedupGuard:
    def __init__(self, sink: NotificationSink, window: Optional[timedelta] = None):
        self.sink = sink
        self.window = window or timedelta(hours=notification_setting("DEDUP_WINDOW_HOURS"))

    def already_notified(self, user_id: str, trigger_id: str, title: str, now: datetime) -> bool:
        return self.sink.exists(user_id, trigger_id, title, since=now - self.window)


class TriggerEngine:
    def __init__(
        self,
        policies: PolicyStore,
        records: RecordProvider,
        sink: NotificationSink,
        clock: Callable[[], datetime] = timezone.now,
        dedup_window: Optional[timedelta] = None,
    ):
        self.policies = policies
        self.records = records
        self.sink = sink
        self.clock = clock
        self.guard = DedupGuard(sink, dedup_window)

    def run_scan(self) -> ScanReport:
        now = self.clock()
        report = ScanReport(started_at=now)
        logger.info("Running notification trigger scan")

        owners = [u for u in self.records.list_active_users() if u.is_owner]
        for owner in owners:
            try:
                if self._scan_account(owner, now, report):
                    report.accounts_scanned += 1
            except Exception:
                logger.exception("Trigger scan failed for account %s", owner.id)
                report.accounts_failed.append(owner.id)

        logger.info(
            "Trigger scan done: %s accounts, %s created, %s suppressed, %s failed",
            report.accounts_scanned, report.created, report.suppressed, len(report.accounts_failed),
        )
        return report

    def _scan_account(self, owner: UserRecord, now: datetime, report: ScanReport) -> bool:
        policy = self.policies.get_policy(owner.id)
        if policy is None:
            return False
        triggers = [t for t in policy.enabled_triggers() if t.scans_orders]
        if not triggers:
            return False

        users = self.records.list_active_users()
        orders = self.records.list_orders()
        today = timezone.localdate(now) if timezone.is_aware(now) else now.date()

        for trigger in triggers:
            for order in orders:
                result = evaluate(trigger, order, today)
                if not result.matches:
                    continue

                targets = resolve_recipients(trigger.recipients, users)
                title = render_template(trigger.title_template, result.template_data)
                message = render_template(trigger.message_template, result.template_data)

                for user in targets:
                    if self.guard.already_notified(user.id, trigger.id, title, now):
                        report.suppressed += 1
                        continue
                    self.sink.create(NotificationDraft(
                        user_id=user.id,
                        type=trigger.severity,
                        title=title,
                        message=message,
                        trigger_id=trigger.id,
                        created_at=now,
                    ))
                    report.created += 1
        return True


def build_engine(**overrides) -> TriggerEngine:
    kwargs = {
        "policies": DjangoPolicyStore(),
        "records": DjangoRecordProvider(),
        "sink": DjangoNotificationSink(),
    }
    kwargs.update(overrides)
    return TriggerEngine(**kwargs)


@contextmanager
def scan_lock():
    """Yields True when this process holds the scan lock, False when another scan is running."""
    key = notification_setting("SCAN_LOCK_KEY")
    token = uuid.uuid4().hex
    acquired = cache.add(key, token, timeout=notification_setting("SCAN_LOCK_TIMEOUT"))
    try:
        yield acquired
    finally:
        if acquired and cache.get(key) == token:
            cache.delete(key)


def run_scan_now(engine: Optional[TriggerEngine] = None) -> Tuple[bool, ScanReport]:
    """Entry point shared by the scheduler, the Celery task and the manual triggers."""
    engine = engine or build_engine()
    with scan_lock() as acquired:
        if not acquired:
            logger.warning("Trigger scan already running; skipping this run")
            return True, ScanReport(started_at=engine.clock(), skipped=True)
        try:
            report = engine.run_scan()
        except Exception:
            logger.exception("Trigger scan aborted")
            return False, ScanReport(started_at=engine.clock())
    return report.ok, report
