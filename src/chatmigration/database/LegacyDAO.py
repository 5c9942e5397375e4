from collections.abc import Sequence
from datetime import tzinfo

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from chatmigration.database.DAO import DAO
from chatmigration.database.factories import EngineFactory
from chatmigration.errors import FetchError
from chatmigration.model.db_models import User, GroupSettings

_TIMESTAMP_COLUMNS = ('created_at', 'updated_at', 'deleted_at')


class LegacyDAO(DAO):
    """Read-only access to the v1 tables.

    Soft-deleted rows (deleted_at set) are skipped, the same as the v1 bot never saw them.
    v1 stores naive DATETIMEs; when ``timezone`` is given they are read as wall-clock
    time in that zone.
    """

    def __init__(self, engine: Engine | EngineFactory, timezone: tzinfo = None):
        super().__init__(engine)
        self._timezone = timezone

    def _localize(self, rows):
        if self._timezone is None:
            return rows

        for row in rows:
            for column in _TIMESTAMP_COLUMNS + (('last_used',) if isinstance(row, User) else ()):
                value = getattr(row, column)
                if value is not None and value.tzinfo is None:
                    setattr(row, column, value.replace(tzinfo=self._timezone))
        return rows

    def find_all_users(self) -> Sequence[User]:
        try:
            with Session(self._engine, expire_on_commit=False) as session, session.begin():
                users = session.scalars(
                    select(User)
                    .where(User.deleted_at.is_(None))
                    .order_by(User.user_id, User.id)
                ).all()
        except SQLAlchemyError as e:
            raise FetchError(f"failed to fetch users from v1: {e}") from e

        return self._localize(users)

    def find_all_group_settings(self) -> Sequence[GroupSettings]:
        # 같은 chat_id 행이 여러 개면 id 순으로 처리되어 마지막 행이 남음
        try:
            with Session(self._engine, expire_on_commit=False) as session, session.begin():
                groups = session.scalars(
                    select(GroupSettings)
                    .where(GroupSettings.deleted_at.is_(None))
                    .order_by(GroupSettings.chat_id, GroupSettings.id)
                ).all()
        except SQLAlchemyError as e:
            raise FetchError(f"failed to fetch group settings from v1: {e}") from e

        return self._localize(groups)
