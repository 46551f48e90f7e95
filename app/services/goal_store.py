"""Owner-scoped access to goal records stored in Supabase.

Every function takes the Supabase client and the caller's user id explicitly.
A goal is only ever visible to, and mutable by, the user whose id is stored in
its ``user_id`` column. Absent and foreign goals are reported the same way so
callers cannot learn whether another user's goal exists.
"""
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union
import logging
import os
import time

from dateutil.parser import isoparse

from app import config
from app.constants import DATE_FIELDS, IMMUTABLE_FIELDS, NULLABLE_FIELDS
from app.schemas.goal import CreateGoal, Goal, GoalImage
from app.services.errors import (
    GoalNotFoundOrForbidden,
    GoalStoreError,
    GoalValidationError,
    Unauthenticated,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise Unauthenticated()
    return user_id


def _to_store_date(key: str, value: Union[str, date, datetime, None]) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    try:
        return isoparse(value).date().isoformat()
    except (TypeError, ValueError) as e:
        raise GoalValidationError(f"Invalid date for {key}: {value!r}") from e


def _owned_goal_row(supabase, user_id: str, goal_id: str) -> Optional[Dict[str, Any]]:
    try:
        response = supabase.table(config.GOALS_TABLE).select("*").eq("id", goal_id).execute()
    except Exception as e:
        logger.error(f"Error fetching goal {goal_id}: {str(e)}")
        raise GoalStoreError(f"Error fetching goal: {str(e)}") from e

    if not response.data:
        return None
    row = response.data[0]
    if row.get("user_id") != user_id:
        logger.warning(f"User {user_id} requested goal {goal_id} owned by another user")
        return None
    return row


def upload_image(supabase, user_id: Optional[str], image: GoalImage) -> str:
    """Store an image under the user's folder and return its public URL."""
    user_id = require_user(user_id)
    filename = os.path.basename(image.filename)
    path = f"goals/{user_id}/{int(time.time() * 1000)}_{filename}"
    bucket = supabase.storage.from_(config.GOAL_IMAGES_BUCKET)

    try:
        file_options = {"content-type": image.content_type} if image.content_type else None
        bucket.upload(path, image.content, file_options)
        image_url = bucket.get_public_url(path)
    except Exception as e:
        logger.error(f"Error uploading image {path}: {str(e)}")
        raise GoalStoreError(f"Error uploading image: {str(e)}") from e

    logger.info(f"Uploaded {len(image.content)} bytes to {path}")
    return image_url


def create_goal(
    supabase,
    user_id: Optional[str],
    goal: CreateGoal,
    image: Optional[GoalImage] = None,
) -> str:
    """Insert a new goal for ``user_id`` and return its id.

    When ``image`` is given it is uploaded first and its URL stored on the
    goal. The upload is not rolled back if the insert fails afterwards.
    """
    user_id = require_user(user_id)

    image_url = goal.image_url
    if image is not None:
        image_url = upload_image(supabase, user_id, image)

    now = _now().isoformat()
    goal_data = goal.model_dump(mode="json")
    goal_data.update({
        "user_id": user_id,
        "actual_completion_date": None,
        "actual_amount": None,
        "image_url": image_url,
        "completed": False,
        "created_at": now,
        "updated_at": now,
    })

    try:
        response = supabase.table(config.GOALS_TABLE).insert(goal_data).execute()
    except Exception as e:
        if image is not None:
            logger.error(f"Goal insert failed after upload, image left orphaned: {image_url}")
        logger.error(f"Error creating goal: {str(e)}")
        raise GoalStoreError(f"Error creating goal: {str(e)}") from e

    if not response.data:
        logger.error("Goal insert returned no row")
        raise GoalStoreError("Failed to create goal")

    goal_id = str(response.data[0]["id"])
    logger.info(f"Created goal {goal_id} for user {user_id}")
    return goal_id


def get_goals(supabase, user_id: Optional[str]) -> List[Goal]:
    """Return the caller's goals, newest first; empty for anonymous callers."""
    if not user_id:
        logger.info("No authenticated user, returning no goals")
        return []

    # Single equality filter; ordering happens here so no (user_id, created_at) index is needed
    try:
        response = supabase \
            .table(config.GOALS_TABLE) \
            .select("*") \
            .eq("user_id", user_id) \
            .execute()
    except Exception as e:
        logger.error(f"Error getting goals: {str(e)}")
        raise GoalStoreError(f"Error getting goals: {str(e)}") from e

    goals = [Goal.model_validate(row) for row in response.data]
    return sorted(goals, key=lambda g: g.created_at, reverse=True)


def get_goal(supabase, user_id: Optional[str], goal_id: str) -> Optional[Goal]:
    if not user_id:
        return None
    row = _owned_goal_row(supabase, user_id, goal_id)
    if row is None:
        return None
    return Goal.model_validate(row)


def update_goal(supabase, user_id: Optional[str], goal_id: str, changes: Dict[str, Any]) -> None:
    """Apply a partial update to one of the caller's goals.

    Date fields may be ``date`` objects or ISO strings. Only the columns in
    ``NULLABLE_FIELDS`` may be set to None (or "" for dates); anything else
    raises ``GoalValidationError`` before the store is touched. ``updated_at``
    is always refreshed; ``id``, ``user_id`` and ``created_at`` are never
    written.
    """
    user_id = require_user(user_id)
    if _owned_goal_row(supabase, user_id, goal_id) is None:
        raise GoalNotFoundOrForbidden(goal_id)

    update_data = {}
    for key, value in changes.items():
        if key in IMMUTABLE_FIELDS:
            logger.warning(f"Ignoring attempt to change {key} of goal {goal_id}")
            continue
        if key in DATE_FIELDS:
            value = _to_store_date(key, value)
        if value is None and key not in NULLABLE_FIELDS:
            raise GoalValidationError(f"{key} may not be cleared")
        if key == "area":
            value = [a.value if isinstance(a, Enum) else a for a in value]
        update_data[key] = value
    update_data["updated_at"] = _now().isoformat()

    try:
        supabase.table(config.GOALS_TABLE).update(update_data).eq("id", goal_id).execute()
    except Exception as e:
        logger.error(f"Error updating goal {goal_id}: {str(e)}")
        raise GoalStoreError(f"Error updating goal: {str(e)}") from e

    logger.info(f"Updated goal {goal_id} fields: {sorted(update_data)}")


def delete_goal(supabase, user_id: Optional[str], goal_id: str) -> None:
    user_id = require_user(user_id)
    if _owned_goal_row(supabase, user_id, goal_id) is None:
        raise GoalNotFoundOrForbidden(goal_id)

    try:
        supabase.table(config.GOALS_TABLE).delete().eq("id", goal_id).execute()
    except Exception as e:
        logger.error(f"Error deleting goal {goal_id}: {str(e)}")
        raise GoalStoreError(f"Error deleting goal: {str(e)}") from e

    logger.info(f"Deleted goal {goal_id}")
