from fastapi.security import OAuth2PasswordRequestForm
from fastapi import APIRouter, Depends, HTTPException, status
from starlette.responses import JSONResponse
from datetime import timedelta

from api.utils.logger import logger, myself
from db.schemas.token import Token
from db.session import get_db

from core import security
from core.auth import authenticate_user, sign_up_new_user

auth_router = r = APIRouter()


def _token_for(user) -> dict:
    access_token_expires = timedelta(
        minutes=security.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    access_token = security.create_access_token(
        data={"sub": user.email},
        expires_delta=access_token_expires,
    )
    return {"access_token": access_token, "token_type": "bearer"}


@r.post("/token", response_model=Token)
def login(
    db=Depends(get_db), form_data: OAuth2PasswordRequestForm = Depends()
):
    try:
        user = authenticate_user(db, form_data.username, form_data.password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect username or password",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return _token_for(user)

    except HTTPException as e:
        logger.warning(f'ERR:{myself()}: {e.detail}')
        raise

    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content='Invalid token request.')


@r.post("/signup", response_model=Token)
def signup(
    db=Depends(get_db), form_data: OAuth2PasswordRequestForm = Depends()
):
    try:
        user = sign_up_new_user(db, form_data.username, form_data.password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Account already exists",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return _token_for(user)

    except HTTPException as e:
        logger.warning(f'ERR:{myself()}: Invalid signup {e.detail}')
        raise

    except Exception as e:
        logger.error(f'ERR:{myself()}: {e}')
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content='Unable to sign up.')
