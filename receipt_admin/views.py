# receipt_admin/views.py
"""
View controllers for the dashboard, independent of the UI toolkit.

Each view owns its own state and talks to the backend through a
ReceiptApiClient. User-visible feedback goes through the injected Notifier,
file exports through the injected Downloader.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .client import ApiError, ReceiptApiClient
from .config import EXPORT_PREFIX, EXPORT_SUFFIX, MESSAGES
from .filters import (
    FilterState,
    next_page,
    page_bounds,
    previous_page,
    total_pages,
)
from .formatters import format_currency
from .models import Receipt, ReceiptPage, StatsDocument
from .notify import Downloader, Notifier

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def export_filename(day: date) -> str:
    return f"{EXPORT_PREFIX}{day.isoformat()}{EXPORT_SUFFIX}"


def _export(
    client: ReceiptApiClient,
    downloader: Downloader,
    notifier: Notifier,
    params: Mapping[str, str],
    today: Clock,
) -> bool:
    try:
        content = client.export_excel(params)
        downloader.save(content, export_filename(today()))
    except (ApiError, OSError):
        logger.exception("Excel export failed (params=%s)", dict(params))
        notifier.error(MESSAGES["export_failed"])
        return False
    notifier.success(MESSAGES["export_ok"])
    return True


# ============================================================
# DASHBOARD
# ============================================================
class StatsView:
    def __init__(
        self,
        client: ReceiptApiClient,
        notifier: Notifier,
        downloader: Downloader,
        today: Clock = utc_today,
    ):
        self.client = client
        self.notifier = notifier
        self.downloader = downloader
        self.today = today
        self.stats: Optional[StatsDocument] = None
        self.loading = False

    def mount(self) -> None:
        self.load()

    def unmount(self) -> None:
        self.stats = None
        self.loading = False

    def load(self) -> bool:
        self.loading = True
        try:
            self.stats = self.client.get_stats()
            return True
        except ApiError:
            logger.exception("Fetch stats error")
            self.notifier.error(MESSAGES["stats_failed"])
            return False
        finally:
            self.loading = False

    def export_all(self) -> bool:
        return _export(self.client, self.downloader, self.notifier, {}, self.today)

    def render_state(self) -> str:
        if self.loading:
            return "loading"
        if self.stats is None:
            return "empty"
        return "ready"

    def summary_cards(self) -> List[Tuple[str, str]]:
        if self.stats is None:
            return []
        s = self.stats.summary
        return [
            ("Toplam Fiş", str(s.totalReceipts)),
            ("Toplam Tutar", format_currency(s.totalAmount)),
            ("Toplam KDV", format_currency(s.totalKdv)),
            ("Bu Ay", str(s.thisMonthReceipts)),
        ]


# ============================================================
# EDIT FORM
# ============================================================
AMOUNT_FIELDS = ("total_amount", "kdv_10_amount", "top_kdv_amount", "net_amount")
TEXT_FIELDS = ("receipt_date", "receipt_no")
FORM_FIELDS = TEXT_FIELDS + AMOUNT_FIELDS


def to_amount(value: Any) -> float:
    """Lenient number input: blanks and garbage become 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value or "").strip()
        if "," in text and "." in text:
            # 1.234,50 -> 1234.50
            text = text.replace(".", "").replace(",", ".")
        elif "," in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return 0.0
    return number if math.isfinite(number) else 0.0


class RecordEditForm:
    """Local editable copy of one receipt.

    Editing total_amount or top_kdv_amount recomputes net_amount; kdv_10_amount
    is independent and never feeds the net figure.
    """

    def __init__(self, on_submit: Optional[Callable[[Receipt], Any]] = None):
        self.on_submit = on_submit
        self.receipt: Optional[Receipt] = None
        self.data: Dict[str, Any] = {}

    def seed(self, receipt: Receipt) -> None:
        if receipt is self.receipt:
            return
        self.receipt = receipt
        self._reset()

    def _reset(self) -> None:
        r = self.receipt
        if r is None:
            self.data = {}
            return
        self.data = {
            "receipt_date": r.receipt_date or "",
            "receipt_no": r.receipt_no or "",
        }
        for field in AMOUNT_FIELDS:
            self.data[field] = to_amount(getattr(r, field))

    def set_field(self, field: str, value: Any) -> None:
        if field not in FORM_FIELDS:
            raise KeyError(f"not an editable field: {field}")
        if self.receipt is None:
            raise RuntimeError("seed() a receipt before editing fields")

        if field in AMOUNT_FIELDS:
            self.data[field] = to_amount(value)
        else:
            self.data[field] = "" if value is None else str(value)

        if field in ("total_amount", "top_kdv_amount"):
            total = self.data["total_amount"]
            kdv = self.data["top_kdv_amount"]
            self.data["net_amount"] = round(total - kdv, 2)

    def merged(self) -> Optional[Receipt]:
        if self.receipt is None:
            return None
        return self.receipt.model_copy(update=self.data)

    def submit(self) -> Optional[Receipt]:
        receipt = self.merged()
        if receipt is not None and self.on_submit is not None:
            self.on_submit(receipt)
        return receipt

    def cancel(self) -> None:
        self._reset()


# ============================================================
# RECEIPT LIST
# ============================================================
@dataclass(frozen=True)
class PendingFetch:
    token: int
    filters: FilterState

    @property
    def params(self) -> Dict[str, str]:
        return self.filters.query_params()


class RecordListView:
    def __init__(
        self,
        client: ReceiptApiClient,
        notifier: Notifier,
        downloader: Downloader,
        today: Clock = utc_today,
        filters: Optional[FilterState] = None,
    ):
        self.client = client
        self.notifier = notifier
        self.downloader = downloader
        self.today = today
        self.initial_filters = filters or FilterState()
        self.filters = self.initial_filters

        self.receipts: List[Receipt] = []
        self.total = 0
        self.loading = False
        self.editor = RecordEditForm(on_submit=self.update_record)
        self.editor_open = False
        self._generation = 0

    def mount(self) -> None:
        self.fetch_page()

    def unmount(self) -> None:
        # anything still in flight belongs to the old mount
        self._generation += 1
        self.filters = self.initial_filters
        self.receipts = []
        self.total = 0
        self.loading = False
        self.close_editor()

    # ---------------------------------------------------------
    # FILTERS + FETCH
    # ---------------------------------------------------------
    def set_filter(self, field: str, value: Any) -> bool:
        new_filters = self.filters.with_field(field, value)
        if new_filters == self.filters:
            return False
        self.filters = new_filters
        self.fetch_page()
        return True

    def begin_fetch(self) -> PendingFetch:
        self._generation += 1
        self.loading = True
        pending = PendingFetch(token=self._generation, filters=self.filters)
        logger.debug("Fetching receipts with filters: %s", pending.params)
        return pending

    def _is_current(self, pending: PendingFetch) -> bool:
        if pending.token != self._generation:
            logger.debug("Discarding stale receipts response (token %s)", pending.token)
            return False
        return True

    def complete_fetch(self, pending: PendingFetch, page: ReceiptPage) -> bool:
        if not self._is_current(pending):
            return False
        self.receipts = list(page.data)
        self.total = page.total
        self.loading = False
        return True

    def fail_fetch(self, pending: PendingFetch, error: Exception) -> bool:
        if not self._is_current(pending):
            return False
        logger.error("Fetch receipts error: %s", error)
        self.notifier.error(MESSAGES["list_failed"])
        self.loading = False
        return True

    def fetch_page(self) -> bool:
        pending = self.begin_fetch()
        try:
            page = self.client.list_receipts(pending.params)
        except ApiError as e:
            self.fail_fetch(pending, e)
            return False
        return self.complete_fetch(pending, page)

    def export_filtered(self) -> bool:
        return _export(
            self.client,
            self.downloader,
            self.notifier,
            self.filters.export_params(),
            self.today,
        )

    # ---------------------------------------------------------
    # PAGINATION
    # ---------------------------------------------------------
    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.filters.limit)

    @property
    def has_previous(self) -> bool:
        return self.filters.page > 1

    @property
    def has_next(self) -> bool:
        return self.filters.page < self.total_pages

    @property
    def show_pagination(self) -> bool:
        return self.total_pages > 1

    def go_previous(self) -> bool:
        return self.set_filter("page", previous_page(self.filters.page))

    def go_next(self) -> bool:
        return self.set_filter("page", next_page(self.filters.page, self.total_pages))

    def page_caption(self) -> str:
        first, last = page_bounds(self.filters.page, self.filters.limit, self.total)
        return f"Toplam {self.total} fişten {first}-{last} arası gösteriliyor"

    # ---------------------------------------------------------
    # EDIT / DELETE
    # ---------------------------------------------------------
    def open_editor(self, receipt: Receipt) -> None:
        self.editor.seed(receipt)
        self.editor_open = True

    def close_editor(self) -> None:
        self.editor.cancel()
        self.editor_open = False

    def update_record(self, receipt: Receipt) -> bool:
        try:
            self.client.update_receipt(receipt)
        except ApiError:
            logger.exception("Update receipt %s failed", receipt.id)
            self.notifier.error(MESSAGES["update_failed"])
            return False

        self.receipts = [receipt if r.id == receipt.id else r for r in self.receipts]
        self.editor_open = False
        self.notifier.success(MESSAGES["update_ok"])
        return True

    def delete_record(self, receipt_id: int, confirm: Callable[[str], bool]) -> bool:
        if not confirm(MESSAGES["delete_confirm"]):
            return False
        try:
            self.client.delete_receipt(receipt_id)
        except ApiError:
            logger.exception("Delete receipt %s failed", receipt_id)
            self.notifier.error(MESSAGES["delete_failed"])
            return False

        self.receipts = [r for r in self.receipts if r.id != receipt_id]
        self.notifier.success(MESSAGES["delete_ok"])
        return True
