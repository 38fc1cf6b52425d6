# routers/reports.py

from fastapi import APIRouter, Depends

from dependencies.auth import CurrentUser, requires_admin
from models.report import ReportSummary
from services.report_generator import generate_summary

router = APIRouter(
    prefix="/api/reports",
    tags=["Reports"],
)


@router.get("/summary", response_model=ReportSummary, summary="Admin dashboard figures")
def report_summary(current_user: CurrentUser = Depends(requires_admin)):
    """
    Users by role, bookings by status, properties by status and
    revenue per month (YYYY-MM).
    """
    return generate_summary()
