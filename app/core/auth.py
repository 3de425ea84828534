import jwt
from fastapi import Depends, HTTPException, status

from api.utils.logger import logger, myself
from core import security
from db.crud.users import create_user, get_user_by_email
from db.schemas.token import TokenData
from db.schemas.users import UserCreate
from db.session import get_db


async def get_current_user(
    db=Depends(get_db), token: str = Depends(security.oauth2_scheme)
):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = security.decode_access_token(token)
        email: str = payload.get("sub")
        if email is None:
            raise credentials_exception
        token_data = TokenData(email=email)
    except jwt.PyJWTError as e:
        logger.warning(f'ERR:{myself()}: {e}')
        raise credentials_exception

    user = get_user_by_email(db, token_data.email)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(
    current_user=Depends(get_current_user),
):
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user


def authenticate_user(db, email: str, password: str):
    user = get_user_by_email(db, email)
    if not user:
        return False
    if not security.verify_password(password, user.hashed_password):
        return False
    return user


def sign_up_new_user(db, email: str, password: str, display_name: str = None):
    user = get_user_by_email(db, email)
    if user:
        return False  # User already exists
    return create_user(db, UserCreate(email=email, password=password, display_name=display_name))
