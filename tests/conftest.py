from unittest.mock import MagicMock

import pytest

from receipt_admin.client import ReceiptApiClient
from receipt_admin.models import Receipt, ReceiptPage


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def success(self, message):
        self.messages.append(("success", message))

    def error(self, message):
        self.messages.append(("error", message))


class MemoryDownloader:
    def __init__(self):
        self.saved = []

    def save(self, content, filename):
        self.saved.append((content, filename))


def make_receipt(id, **overrides):
    data = {
        "id": id,
        "telegram_user_id": "1001",
        "telegram_username": "ali",
        "first_name": "Ali",
        "last_name": "Yılmaz",
        "receipt_date": "2024-03-05",
        "receipt_no": f"F-{id}",
        "total_amount": 150.0,
        "kdv_10_amount": 13.64,
        "top_kdv_amount": 13.64,
        "net_amount": 136.36,
        "created_at": "2024-03-05T10:00:00Z",
        "updated_at": "2024-03-05T10:00:00Z",
    }
    data.update(overrides)
    return Receipt(**data)


def make_page(receipts, total=None):
    return ReceiptPage(data=receipts, total=len(receipts) if total is None else total)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def downloader():
    return MemoryDownloader()


@pytest.fixture
def client():
    mock = MagicMock(spec=ReceiptApiClient)
    mock.list_receipts.return_value = make_page([])
    return mock
