from fastapi import Header, HTTPException
from supabase import create_client
from typing import Optional
from app import config
import time
import logging

logger = logging.getLogger(__name__)


def _authenticate(authorization: str):
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid token format")

    token = authorization.split(" ")[1]

    if not config.SUPABASE_URL or not config.SUPABASE_KEY:
        logger.error("Supabase URL or Key not found in environment variables")
        raise HTTPException(status_code=500, detail="Server configuration error")

    try:
        start_time = time.time()
        logger.info("Creating Supabase client")
        supabase = create_client(config.SUPABASE_URL, config.SUPABASE_KEY)

        logger.info("Validating token with Supabase")
        user_res = supabase.auth.get_user(token)
        end_time = time.time()
        logger.info(f"Token validation completed in {end_time - start_time:.2f} seconds")
    except Exception as e:
        logger.error(f"Supabase token validation error: {str(e)}")
        if "timed out" in str(e).lower():
            raise HTTPException(
                status_code=504,
                detail="Connection to authentication service timed out. Please try again later."
            )
        raise HTTPException(status_code=401, detail=f"Authentication error: {str(e)}")

    if not user_res or not user_res.user:
        logger.warning("User not found after successful token validation")
        raise HTTPException(status_code=401, detail="User not found")

    # Run table queries as the user so row level security applies
    supabase.postgrest.auth(token)

    logger.info(f"Successfully authenticated user: {user_res.user.id}")
    return {
        "supabase": supabase,
        "user_id": user_res.user.id,
        "user": user_res.user,
    }


async def user_supabase_client(authorization: Optional[str] = Header(None)):
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")
    return _authenticate(authorization)


async def optional_user_supabase_client(authorization: Optional[str] = Header(None)):
    """Like ``user_supabase_client`` but yields an anonymous context instead of a 401."""
    if not authorization:
        return {"supabase": None, "user_id": None, "user": None}
    try:
        return _authenticate(authorization)
    except HTTPException as e:
        if e.status_code != 401:
            raise
        logger.info(f"Treating request as anonymous: {e.detail}")
        return {"supabase": None, "user_id": None, "user": None}
