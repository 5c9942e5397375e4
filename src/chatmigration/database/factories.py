from abc import *

from sqlalchemy import create_engine, text, Engine
from sqlalchemy.exc import SQLAlchemyError

from chatmigration.database.dsn import mysql_engine_args, postgres_engine_args
from chatmigration.errors import DatabaseConnectionError


class EngineFactory(metaclass=ABCMeta):
    def __init__(self, dsn: str):
        self._dsn = dsn
        self._engine = None

    @abstractmethod
    def _create_engine(self) -> Engine:
        pass

    def get_instance(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def connect(self) -> Engine:
        """Create the engine and make sure the database answers."""
        try:
            engine = self.get_instance()
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            self.dispose()
            raise DatabaseConnectionError(f"unable to ping database: {e}") from e

        return engine

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


class MySQLEngineFactory(EngineFactory):
    def _create_engine(self) -> Engine:
        url, connect_args = mysql_engine_args(self._dsn)
        return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


class PostgreSQLEngineFactory(EngineFactory):
    def _create_engine(self) -> Engine:
        url, connect_args = postgres_engine_args(self._dsn)
        return create_engine(url, connect_args=connect_args)
