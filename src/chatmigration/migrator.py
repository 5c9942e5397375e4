from collections.abc import Iterable

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from chatmigration.database.ChatDAO import ChatDAO
from chatmigration.errors import MigrationError
from chatmigration.model.db_models import User, GroupSettings
from chatmigration.model.migration_models import ChatRow, SettingsRow
from chatmigration.util.logger import get_logger

migration_logger = get_logger(name='migration')


class MigrationReport(BaseModel):
    users_migrated: int = 0
    users_failed: int = 0
    settings_migrated: int = 0
    settings_failed: int = 0

    @property
    def has_failures(self) -> bool:
        return self.users_failed > 0 or self.settings_failed > 0

    @property
    def exit_code(self) -> int:
        return 1 if self.has_failures else 0


def migrate_user(chat_dao: ChatDAO, user: User) -> None:
    """Turn a v1 user into a private chat with default settings."""
    try:
        chat_dao.insert_chat(ChatRow.from_user(user))
    except (SQLAlchemyError, ValueError) as e:
        raise MigrationError('user', user.user_id, 'chat', e) from e

    try:
        chat_dao.upsert_private_settings(SettingsRow.from_user(user))
    except (SQLAlchemyError, ValueError) as e:
        raise MigrationError('user', user.user_id, 'settings', e) from e


def migrate_group(chat_dao: ChatDAO, group: GroupSettings) -> None:
    """Turn v1 group settings into a group chat, refreshing its settings."""
    try:
        chat_dao.insert_chat(ChatRow.from_group_settings(group))
    except (SQLAlchemyError, ValueError) as e:
        raise MigrationError('chat', group.chat_id, 'chat', e) from e

    try:
        chat_dao.upsert_group_settings(SettingsRow.from_group_settings(group))
    except (SQLAlchemyError, ValueError) as e:
        raise MigrationError('chat', group.chat_id, 'settings', e) from e


def run_migration(chat_dao: ChatDAO,
                  users: Iterable[User],
                  group_settings: Iterable[GroupSettings]) -> MigrationReport:
    report = MigrationReport()

    for user in users:
        try:
            migrate_user(chat_dao, user)
        except MigrationError as e:
            migration_logger.error(f"✗ {e}")
            report.users_failed += 1
            continue
        report.users_migrated += 1
        migration_logger.info(f"✓ migrated user: {user.user_id}")

    for group in group_settings:
        try:
            migrate_group(chat_dao, group)
        except MigrationError as e:
            migration_logger.error(f"✗ {e}")
            report.settings_failed += 1
            continue
        report.settings_migrated += 1
        migration_logger.info(f"✓ migrated chat: {group.chat_id}")

    return report
