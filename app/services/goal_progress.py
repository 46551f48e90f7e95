from datetime import date
from typing import List, Optional

from app.constants import AREAS
from app.schemas.goal import AreaSummary, Goal, GoalDetail


def progress_percentage(goal: Goal) -> float:
    if not goal.actual_amount or not goal.expected_amount:
        return 0
    return min(goal.actual_amount / goal.expected_amount * 100, 100)


def is_completed(goal: Goal) -> bool:
    if goal.completed:
        return True
    if goal.actual_amount is None or goal.expected_amount is None:
        return False
    return goal.actual_amount >= goal.expected_amount


def is_overdue(goal: Goal, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return not goal.completed and today > goal.expected_completion_date


def with_progress(goal: Goal, today: Optional[date] = None) -> GoalDetail:
    completed = is_completed(goal)
    return GoalDetail(
        **goal.model_dump(),
        progress_percentage=progress_percentage(goal),
        is_completed=completed,
        # A finished goal is never shown as overdue
        is_overdue=not completed and is_overdue(goal, today),
    )


def area_summary(goals: List[Goal]) -> List[AreaSummary]:
    """Count goals per configured area. A goal tagged with several areas counts in each."""
    return [
        AreaSummary(
            area=area["id"],
            display_name=area["display_name"],
            icon=area["icon"],
            count=sum(1 for goal in goals if area["id"] in goal.area),
        )
        for area in AREAS
    ]
