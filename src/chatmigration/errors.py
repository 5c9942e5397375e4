class MigrationToolError(Exception):
    """Base class for every error raised by the migration tool."""
    pass


class ConfigError(MigrationToolError):
    """Raised when required configuration is missing or malformed."""
    pass


class DatabaseConnectionError(MigrationToolError):
    """Raised when the source or destination database cannot be reached."""
    pass


class FetchError(MigrationToolError):
    """Raised when a legacy table cannot be read in full."""
    pass


class MigrationError(MigrationToolError):
    """Raised when a single legacy record could not be written to the v2 database."""

    def __init__(self, entity: str, entity_id: int, step: str, cause: Exception):
        self.entity = entity
        self.entity_id = entity_id
        self.step = step
        self.cause = cause
        super().__init__(f"failed to migrate {entity} {entity_id}: failed to insert {step}: {cause}")
