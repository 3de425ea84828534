from sqlalchemy import func
from sqlalchemy.orm import Session
import typing as t

from api.utils.logger import logger
from core.errors import NotFound
from core.security import get_password_hash
from db.models import users as models
from db.schemas import users as schemas
from db.session import commit

#################################
### CRUD OPERATIONS FOR USERS ###
#################################


def get_user(db: Session, user_id: int):
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise NotFound("user not found")
    return user


def get_user_by_email(db: Session, email: str) -> t.Optional[models.User]:
    return db.query(models.User).filter(func.lower(models.User.email) == email.strip().lower()).first()


def create_user(db: Session, user: schemas.UserCreate):
    db_user = models.User(
        email=user.email.strip().lower(),
        display_name=user.display_name,
        wallet_address=user.wallet_address,
        wallet_chain=user.wallet_chain,
        is_active=True,
        hashed_password=get_password_hash(user.password),
    )
    db.add(db_user)
    commit(db)
    db.refresh(db_user)

    logger.info(f'user {db_user.id} created')
    return db_user
