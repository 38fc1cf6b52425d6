# services/report_generator.py

"""
Admin report aggregation.

All figures are computed from full-table snapshots; the tables are small
enough for a single pass each.
"""

from collections import Counter, OrderedDict

from core.logging_config import logger
from core.supabase_helpers import safe_select
from core.utils import parse_timestamp
from models.enums import BookingStatus, PropertyStatus, Role
from models.report import MonthlyRevenue, ReportSummary


def _count_by(rows: list, key: str, known: list) -> dict:
    counts = Counter(row.get(key) for row in rows)
    result = {name: counts.get(name, 0) for name in known}
    for name, count in counts.items():
        if name and name not in result:
            result[name] = count
    return result


def monthly_revenue(payments: list) -> list:
    """Sum payment amounts per calendar month (YYYY-MM), oldest first."""
    totals = {}
    for payment in payments:
        stamp = parse_timestamp(payment.get("date") or payment.get("created_at"))
        if stamp is None:
            continue
        month = stamp.strftime("%Y-%m")
        totals[month] = totals.get(month, 0.0) + float(payment.get("amount") or 0)

    ordered = OrderedDict(sorted(totals.items()))
    return [MonthlyRevenue(month=m, revenue=r) for m, r in ordered.items()]


def generate_summary() -> ReportSummary:
    users = safe_select("users")
    roles = safe_select("user_roles")
    bookings = safe_select("bookings")
    properties = safe_select("properties")
    payments = safe_select("payments")

    revenue = monthly_revenue(payments)

    summary = ReportSummary(
        total_users=len(users),
        users_by_role=_count_by(roles, "role", Role.list()),
        total_bookings=len(bookings),
        bookings_by_status=_count_by(bookings, "status", BookingStatus.list()),
        total_properties=len(properties),
        properties_by_status=_count_by(properties, "status", PropertyStatus.list()),
        total_revenue=sum(m.revenue for m in revenue),
        monthly_revenue=revenue,
    )
    logger.info(f"Report summary generated: {summary.total_users} users, {summary.total_bookings} bookings")
    return summary
