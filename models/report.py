# models/report.py

from typing import Dict, List
from pydantic import BaseModel


class MonthlyRevenue(BaseModel):
    month: str
    revenue: float


class ReportSummary(BaseModel):
    """Admin dashboard aggregates."""
    total_users: int
    users_by_role: Dict[str, int]
    total_bookings: int
    bookings_by_status: Dict[str, int]
    total_properties: int
    properties_by_status: Dict[str, int]
    total_revenue: float
    monthly_revenue: List[MonthlyRevenue]
