from datetime import date
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from app.dependencies.auth import optional_user_supabase_client, user_supabase_client
from app.schemas.goal import (
    Area,
    AreaSummary,
    CreateGoal,
    CreatedGoal,
    GoalDetail,
    GoalImage,
    UpdateGoal,
    UploadedImage,
)
from app.services import goal_store
from app.services.errors import (
    GoalNotFoundOrForbidden,
    GoalStoreError,
    GoalValidationError,
    Unauthenticated,
)
from app.services.goal_progress import area_summary, with_progress

logger = logging.getLogger(__name__)

router = APIRouter()


def _read_image(image: Optional[UploadFile]) -> Optional[GoalImage]:
    if image is None or not image.filename:
        return None
    if image.content_type and not image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")
    content = image.file.read()
    logger.info(f"Read {len(content)} bytes from uploaded image {image.filename}")
    return GoalImage(filename=image.filename, content=content, content_type=image.content_type)


# -------- Goals --------

@router.post("/goal", response_model=CreatedGoal, status_code=201)
def create_goal(
    title: str = Form(...),
    description: str = Form(""),
    area: List[Area] = Form(...),
    start_date: date = Form(...),
    expected_completion_date: date = Form(...),
    expected_amount: Optional[float] = Form(None),
    image_url: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    context=Depends(user_supabase_client),
):
    try:
        goal = CreateGoal(
            title=title,
            description=description,
            area=area,
            start_date=start_date,
            expected_completion_date=expected_completion_date,
            expected_amount=expected_amount,
            image_url=image_url,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))

    try:
        goal_id = goal_store.create_goal(context["supabase"], context["user_id"], goal, _read_image(image))
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except GoalStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"id": goal_id}


@router.get("/goals", response_model=List[GoalDetail])
def get_goals(context=Depends(optional_user_supabase_client)):
    try:
        goals = goal_store.get_goals(context["supabase"], context["user_id"])
    except GoalStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [with_progress(goal) for goal in goals]


@router.get("/areas", response_model=List[AreaSummary])
def get_area_summary(context=Depends(optional_user_supabase_client)):
    try:
        goals = goal_store.get_goals(context["supabase"], context["user_id"])
    except GoalStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return area_summary(goals)


@router.get("/goal/{goal_id}", response_model=GoalDetail)
def get_goal(goal_id: str, context=Depends(user_supabase_client)):
    try:
        goal = goal_store.get_goal(context["supabase"], context["user_id"], goal_id)
    except GoalStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return with_progress(goal)


@router.put("/goal/{goal_id}", response_model=GoalDetail)
def update_goal(goal_id: str, goal: UpdateGoal, context=Depends(user_supabase_client)):
    supabase = context["supabase"]
    user_id = context["user_id"]

    try:
        goal_store.update_goal(supabase, user_id, goal_id, goal.model_dump(exclude_unset=True))
        updated = goal_store.get_goal(supabase, user_id, goal_id)
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except GoalNotFoundOrForbidden:
        raise HTTPException(status_code=404, detail="Goal not found")
    except GoalValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GoalStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if updated is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return with_progress(updated)


@router.delete("/goal/{goal_id}")
def delete_goal(goal_id: str, context=Depends(user_supabase_client)):
    try:
        goal_store.delete_goal(context["supabase"], context["user_id"], goal_id)
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except GoalNotFoundOrForbidden:
        raise HTTPException(status_code=404, detail="Goal not found")
    except GoalStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"message": "Deleted"}


# -------- Images --------

@router.post("/image", response_model=UploadedImage, status_code=201)
def upload_image(image: UploadFile = File(...), context=Depends(user_supabase_client)):
    goal_image = _read_image(image)
    if goal_image is None:
        raise HTTPException(status_code=400, detail="No image provided")

    try:
        image_url = goal_store.upload_image(context["supabase"], context["user_id"], goal_image)
    except Unauthenticated as e:
        raise HTTPException(status_code=401, detail=str(e))
    except GoalStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"image_url": image_url}
