from sqlalchemy import Engine

from chatmigration.database.factories import EngineFactory


class DAO:
    def __init__(self, engine: Engine | EngineFactory):
        if isinstance(engine, EngineFactory):
            engine = engine.get_instance()
        self._engine = engine
