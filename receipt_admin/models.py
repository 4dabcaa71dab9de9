# receipt_admin/models.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class Receipt(BaseModel):
    # Backend columns we do not know about are kept and sent back on PUT
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: int

    telegram_user_id: Optional[str] = None
    telegram_username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    receipt_date: Optional[str] = None  # ISO date or timestamp string
    receipt_no: Optional[str] = None

    total_amount: Optional[float] = None
    kdv_10_amount: Optional[float] = None
    top_kdv_amount: Optional[float] = None
    net_amount: Optional[float] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ReceiptPage(BaseModel):
    data: List[Receipt] = []
    total: int = 0


class StatsSummary(BaseModel):
    totalReceipts: int
    totalAmount: Optional[float] = None
    totalKdv: Optional[float] = None
    thisMonthReceipts: int = 0


class RecentReceipt(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: int
    receipt_no: Optional[str] = None
    telegram_username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    total_amount: Optional[float] = None
    created_at: Optional[str] = None


class MonthlyStat(BaseModel):
    month: str
    count: int = 0
    total_amount: Optional[float] = None
    topKdvAmount: Optional[float] = None
    netAmount: Optional[float] = None


class UserStat(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    telegram_username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    receipt_count: int = 0
    total_amount: Optional[float] = None


# Key names mirror GET /api/stats exactly
class StatsDocument(BaseModel):
    summary: StatsSummary
    recentReceipts: List[RecentReceipt] = []
    monthlyStats: List[MonthlyStat] = []
    userStats: List[UserStat] = []
