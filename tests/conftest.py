from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from chatmigration.model.db_models import LegacyBase, Base, User, GroupSettings

T1 = datetime(2023, 1, 10, 12, 0, 0)
T2 = datetime(2023, 3, 5, 8, 30, 0)
T3 = datetime(2024, 6, 1, 9, 0, 0)


def _sqlite_engine():
    return create_engine("sqlite://",
                         connect_args={'check_same_thread': False},
                         poolclass=StaticPool)


@pytest.fixture
def v1_engine():
    engine = _sqlite_engine()
    LegacyBase.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def v2_engine():
    engine = _sqlite_engine()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


def make_user(user_id: int, created_at=T1, updated_at=None, **kwargs) -> User:
    return User(id=kwargs.pop('id', user_id),
                user_id=user_id,
                last_used=kwargs.pop('last_used', created_at),
                created_at=created_at,
                updated_at=updated_at or created_at,
                **kwargs)


def make_group(chat_id: int, media_group_limit: int = 25, created_at=T2, updated_at=None, **kwargs) -> GroupSettings:
    return GroupSettings(id=kwargs.pop('id', chat_id),
                         chat_id=chat_id,
                         media_group_limit=media_group_limit,
                         created_at=created_at,
                         updated_at=updated_at or created_at,
                         **kwargs)


def seed(engine, *models):
    with Session(engine) as session, session.begin():
        session.add_all(models)


def fetch(engine, model, pk):
    with Session(engine) as session:
        return session.get(model, pk)
