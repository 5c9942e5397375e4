from sqlalchemy.dialects import postgresql, sqlite

from chatmigration.database.DAO import DAO
from chatmigration.errors import MigrationToolError
from chatmigration.model.db_models import Chat, Settings
from chatmigration.model.migration_models import ChatRow, SettingsRow

_DIALECT_INSERTS = {
    'postgresql': postgresql.insert,
    # in-memory SQLite backs the test suite
    'sqlite': sqlite.insert,
}


class ChatDAO(DAO):
    """Idempotent writes into the v2 chat and settings tables.

    Every statement runs in its own transaction, so a chat row stays in place
    even if the settings upsert after it fails.
    """

    def _insert(self, table):
        dialect = self._engine.dialect.name
        if dialect not in _DIALECT_INSERTS:
            raise MigrationToolError(f"upsert is not supported on {dialect}")
        return _DIALECT_INSERTS[dialect](table)

    def _execute(self, statement) -> None:
        with self._engine.begin() as connection:
            connection.execute(statement)

    def insert_chat(self, row: ChatRow) -> None:
        # chat type and timestamps never change once the chat exists
        statement = (
            self._insert(Chat.__table__)
            .values(**row.to_values())
            .on_conflict_do_nothing(index_elements=['chat_id'])
        )
        self._execute(statement)

    def upsert_private_settings(self, row: SettingsRow) -> None:
        statement = self._insert(Settings.__table__).values(**row.to_values())
        statement = statement.on_conflict_do_update(
            index_elements=['chat_id'],
            set_={'updated_at': statement.excluded.updated_at},
        )
        self._execute(statement)

    def upsert_group_settings(self, row: SettingsRow) -> None:
        statement = self._insert(Settings.__table__).values(**row.to_values())
        statement = statement.on_conflict_do_update(
            index_elements=['chat_id'],
            set_={
                'nsfw': statement.excluded.nsfw,
                'media_album_limit': statement.excluded.media_album_limit,
                'captions': statement.excluded.captions,
                'silent': statement.excluded.silent,
                'updated_at': statement.excluded.updated_at,
            },
        )
        self._execute(statement)
