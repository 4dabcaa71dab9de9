from unittest.mock import MagicMock, patch

import pytest

from conftest import make_page, make_receipt
from receipt_admin import cli
from receipt_admin.client import ApiError
from receipt_admin.models import StatsDocument


def _run(argv, api):
    with patch("receipt_admin.cli.ReceiptApiClient", return_value=api):
        with pytest.raises(SystemExit) as exc:
            cli.main(argv)
    return exc.value.code


@pytest.fixture
def api():
    mock = MagicMock()
    mock.list_receipts.return_value = make_page([])
    return mock


def test_stats_prints_summary(api, capsys):
    api.get_stats.return_value = StatsDocument.model_validate(
        {
            "summary": {"totalReceipts": 2, "totalAmount": 300, "totalKdv": 27.27, "thisMonthReceipts": 1},
            "monthlyStats": [{"month": "2024-03", "count": 2, "total_amount": 300}],
        }
    )
    assert _run(["stats"], api) == 0
    out = capsys.readouterr().out
    assert "Toplam Fiş: 2" in out
    assert "Toplam Tutar: 300,00 TL" in out
    assert "2024-03" in out


def test_stats_failure_exit_code(api, capsys):
    api.get_stats.side_effect = ApiError("down")
    assert _run(["stats"], api) == 1
    assert "İstatistikler yüklenemedi" in capsys.readouterr().err


def test_list_passes_filters(api, capsys):
    api.list_receipts.return_value = make_page([make_receipt(1)], total=80)
    code = _run(["list", "--user", "ali", "--page", "2", "--limit", "50"], api)

    assert code == 0
    api.list_receipts.assert_called_once_with({"user": "ali", "page": "2", "limit": "50"})
    out = capsys.readouterr().out
    assert "05.03.2024" in out
    assert "150,00 TL" in out
    assert "Toplam 80 fişten 51-80 arası gösteriliyor (2 / 2)" in out


def test_list_empty(api, capsys):
    assert _run(["list"], api) == 0
    assert "Fiş bulunamadı" in capsys.readouterr().out


def test_export_writes_file(api, tmp_path):
    api.export_excel.return_value = b"xlsx-bytes"
    code = _run(["export", "--start-date", "2024-01-01", "--output-dir", str(tmp_path)], api)

    assert code == 0
    api.export_excel.assert_called_once_with({"startDate": "2024-01-01"})
    files = list(tmp_path.glob("fisler_*.xlsx"))
    assert len(files) == 1
    assert files[0].read_bytes() == b"xlsx-bytes"


def test_delete_with_yes(api):
    assert _run(["delete", "5", "--yes"], api) == 0
    api.delete_receipt.assert_called_once_with(5)


def test_delete_declined(api, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "h")
    assert _run(["delete", "5"], api) == 0
    api.delete_receipt.assert_not_called()
    assert "Vazgeçildi." in capsys.readouterr().out


def test_delete_failure(api):
    api.delete_receipt.side_effect = ApiError("404", status_code=404)
    assert _run(["delete", "5", "--yes"], api) == 1
