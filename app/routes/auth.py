from fastapi import APIRouter, Depends
from app.schemas.auth import CurrentUser
from app.dependencies.auth import user_supabase_client

router = APIRouter()

@router.get("/me", response_model=CurrentUser)
def get_me(context=Depends(user_supabase_client)):
    user = context["user"]
    return {"id": context["user_id"], "email": getattr(user, "email", None)}
