import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.db.session import Base
from app.db import models


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_user(session, role, first_name, styles=None, **fields):
    user = models.User(
        first_name=first_name,
        last_name="Test",
        role=role,
        swimming_styles=list(styles or []),
        **fields,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture()
def make_instructor(db_session):
    def factory(first_name="Ian", styles=("Freestyle", "Backstroke"), session=None):
        return create_user(session or db_session, models.UserRole.instructor, first_name, styles)

    return factory


@pytest.fixture()
def make_swimmer(db_session):
    def factory(first_name="Sam", styles=("Freestyle",), session=None, **fields):
        return create_user(session or db_session, models.UserRole.swimmer, first_name, styles, **fields)

    return factory
