from fastapi import APIRouter, Depends

from core.auth import get_current_active_user
from db.schemas.users import User

users_router = r = APIRouter()


@r.get("/me", response_model=User, response_model_exclude_none=True, name="users:me")
async def user_me(current_user=Depends(get_current_active_user)):
    """
    Get own user
    """
    return current_user
