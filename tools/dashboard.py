"""
Dashboard statistics derived from project and lead rows.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

from models.schemas import PENDING_LEAD_STAGES, DashboardStats, LeadStage, ProjectStage

UPCOMING_SHOOT_STAGES = (ProjectStage.PRE_PRODUCTION.value, ProjectStage.SHOOTING.value)
INACTIVE_PROJECT_STAGES = (ProjectStage.LEADS.value, ProjectStage.DELIVERED.value)


def _as_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _count_by_stage(projects: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    counts = {stage.value: 0 for stage in ProjectStage}
    for project in projects:
        stage = project.get("stage")
        if stage in counts:
            counts[stage] += 1
    return counts


def compute_dashboard_stats(
    projects: List[Dict[str, Any]],
    leads: List[Dict[str, Any]],
    today: Optional[date] = None,
    upcoming_days: int = 30,
) -> DashboardStats:
    """
    Summarize a user's pipeline.

    Monthly revenue counts budgets of projects delivered this calendar month
    (by `updated_at`). Upcoming shoots are pre-production or shooting projects
    whose deadline falls within `upcoming_days` of today, inclusive.
    """
    today = today or date.today()
    horizon = today + timedelta(days=upcoming_days)
    pending_stages = {stage.value for stage in PENDING_LEAD_STAGES}

    active = [p for p in projects if p.get("stage") not in INACTIVE_PROJECT_STAGES]

    monthly_revenue = 0.0
    upcoming = 0
    for project in projects:
        stage = project.get("stage")
        if stage == ProjectStage.DELIVERED.value:
            delivered_on = _as_date(project.get("updated_at"))
            if delivered_on and (delivered_on.year, delivered_on.month) == (today.year, today.month):
                monthly_revenue += float(project.get("budget") or 0)
        elif stage in UPCOMING_SHOOT_STAGES:
            deadline = _as_date(project.get("deadline"))
            if deadline and today <= deadline <= horizon:
                upcoming += 1

    pending = sum(1 for lead in leads if lead.get("stage") in pending_stages)
    booked = sum(1 for lead in leads if lead.get("stage") == LeadStage.BOOKED.value)
    conversion_rate = round(booked / len(leads), 4) if leads else 0.0

    return DashboardStats(
        active_projects=len(active),
        pending_leads=pending,
        monthly_revenue=round(monthly_revenue, 2),
        upcoming_shoots_count=upcoming,
        booked_leads=booked,
        conversion_rate=conversion_rate,
        projects_by_stage=_count_by_stage(projects),
        generated_at=datetime.now(timezone.utc),
    )
