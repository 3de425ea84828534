from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from api.utils.logger import logger, myself, LEIF
from core.errors import StoreError
from core.config import SQLALCHEMY_DATABASE_URI


def get_engine(cs: str):
    if not cs.startswith('sqlite'):
        return create_engine(cs, pool_pre_ping=True)

    # in-memory databases must share one connection across threads
    if cs in ('sqlite://', 'sqlite:///:memory:'):
        eng = create_engine(cs, connect_args={'check_same_thread': False}, poolclass=StaticPool)
    else:
        eng = create_engine(cs, connect_args={'check_same_thread': False})

    # pysqlite defers BEGIN on its own, which breaks savepoints; take control of it
    @event.listens_for(eng, 'connect')
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()

    @event.listens_for(eng, 'begin')
    def _on_begin(conn):
        conn.exec_driver_sql('BEGIN')

    return eng


engine = get_engine(SQLALCHEMY_DATABASE_URI)
SessionLocal = sessionmaker(autocommit=False, autoflush=True, bind=engine)

Base = declarative_base()


def init_db(eng=None):
    # make sure every model is registered on Base before create_all
    from db.models import users, projects, wallets, applications, collaborations, activity  # noqa: F401
    eng = eng or engine
    logger.log(LEIF, f'init tables on {eng.url.drivername}')
    Base.metadata.create_all(bind=eng)


def commit(db: Session):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f'ERR:{myself()}: {e}')
        raise StoreError(f'unable to save changes ({e.__class__.__name__})') from e


# Dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
