"""
v1(MariaDB) 데이터베이스의 사용자와 그룹 설정을 v2(PostgreSQL)의 chat, settings 테이블로 옮깁니다.

V1_DSN, V2_DSN 환경 변수로 두 데이터베이스를 지정합니다.
v2 테이블은 미리 생성되어 있어야 합니다.

여러 번 실행해도 결과가 같습니다. 실패한 레코드가 있으면 종료 코드 1을 반환하므로
원인을 해결한 뒤 다시 실행하세요.
"""
import sys

from chatmigration.config.config import load_config_from_env, load_tool_settings
from chatmigration.database.ChatDAO import ChatDAO
from chatmigration.database.LegacyDAO import LegacyDAO
from chatmigration.database.dsn import mysql_timezone
from chatmigration.database.factories import MySQLEngineFactory, PostgreSQLEngineFactory
from chatmigration.errors import MigrationToolError
from chatmigration.migrator import run_migration, migration_logger, MigrationReport
from chatmigration.util.logger import configure_logger


def migrate() -> MigrationReport:
    migration_logger.info("starting v1 to v2 migration tool...")

    config = load_config_from_env()

    v1_factory = MySQLEngineFactory(config.v1_dsn)
    legacy_dao = LegacyDAO(v1_factory.connect(), timezone=mysql_timezone(config.v1_dsn))
    migration_logger.info("✓ connected to v1 database (MariaDB)")

    v2_factory = PostgreSQLEngineFactory(config.v2_dsn)
    try:
        chat_dao = ChatDAO(v2_factory.connect())
        migration_logger.info("✓ connected to v2 database (PostgreSQL)")

        users = legacy_dao.find_all_users()
        migration_logger.info(f"✓ found {len(users)} users in v1 database")

        group_settings = legacy_dao.find_all_group_settings()
        migration_logger.info(f"✓ found {len(group_settings)} group settings in v1 database")
        v1_factory.dispose()

        report = run_migration(chat_dao, users, group_settings)
    finally:
        v2_factory.dispose()

    migration_logger.info(f"users: {report.users_migrated} migrated, {report.users_failed} failed")
    migration_logger.info(f"group settings: {report.settings_migrated} migrated, "
                          f"{report.settings_failed} failed")
    return report


def main() -> int:
    try:
        settings = load_tool_settings()
        configure_logger(migration_logger, settings.logging.level, settings.logging.save_path)
        report = migrate()
    except MigrationToolError as e:
        migration_logger.critical(f"migration aborted: {e}")
        return 1

    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
