import pytest
from sqlalchemy.orm import sessionmaker

from core.constants import Chain
from core.security import get_password_hash
from db.crud.projects import create_project
from db.models.users import User
from db.schemas.projects import ProjectCreate
from db.session import get_engine, init_db


@pytest.fixture
def engine():
    # fresh in-memory database per test
    eng = get_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=True, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def make_user(db, email):
    user = User(email=email, display_name=email.split("@")[0], hashed_password=get_password_hash("secret"))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def owner(db):
    return make_user(db, "owner@launchlist.test")


@pytest.fixture
def other_user(db):
    return make_user(db, "other@launchlist.test")


@pytest.fixture
def project(db, owner):
    return create_project(db, owner.id, ProjectCreate(name="Moon Cats", chain=Chain.ethereum))


@pytest.fixture
def other_project(db, other_user):
    return create_project(db, other_user.id, ProjectCreate(name="Sun Dogs", chain=Chain.ethereum))
