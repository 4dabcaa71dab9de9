# receipt_admin/config.py
"""Backend location, paging and user-facing message constants."""
from __future__ import annotations

import os

# CHANGE THIS (or set RECEIPT_ADMIN_BACKEND_URL) to point at the receipts API
BACKEND_URL = os.getenv("RECEIPT_ADMIN_BACKEND_URL", "http://127.0.0.1:3000")
REQUEST_TIMEOUT = float(os.getenv("RECEIPT_ADMIN_TIMEOUT", "15"))
LOG_LEVEL = os.getenv("RECEIPT_ADMIN_LOG_LEVEL", "INFO")
DISPLAY_TIMEZONE = os.getenv("RECEIPT_ADMIN_TZ", "Europe/Istanbul")

# Endpoints
STATS_PATH = "/api/stats"
RECEIPTS_PATH = "/api/receipts"
EXPORT_PATH = "/api/receipts/export/excel"

# Paging
PAGE_SIZES = (25, 50, 100)
DEFAULT_PAGE_SIZE = 25

# Export
EXPORT_PREFIX = "fisler_"
EXPORT_SUFFIX = ".xlsx"
EXPORT_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

CURRENCY_SUFFIX = "TL"
ANONYMOUS_LABEL = "Anonim"
MISSING_LABEL = "N/A"

# Toast / prompt texts
MESSAGES = {
    "stats_failed": "İstatistikler yüklenemedi",
    "stats_empty": "Veri yüklenemedi",
    "list_failed": "Fişler yüklenemedi",
    "list_empty": "Fiş bulunamadı",
    "export_ok": "Excel dosyası indirildi",
    "export_failed": "Excel export hatası",
    "delete_confirm": "Bu fişi silmek istediğinizden emin misiniz?",
    "delete_ok": "Fiş silindi",
    "delete_failed": "Fiş silinemedi",
    "update_ok": "Fiş güncellendi",
    "update_failed": "Fiş güncellenemedi",
}
