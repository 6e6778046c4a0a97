"""Application exceptions."""


class AppError(Exception):
    """Base exception for application errors."""


class ModelError(AppError):
    """Base exception for model/database operations."""


class DatabaseConnectionError(ModelError):
    """Raised when database connection fails."""


class MigrationError(AppError):
    """Raised when a schema migration cannot be applied or reverted.

    Wraps errors reported by Alembic so callers do not depend on Alembic's
    exception types.
    """

    def __init__(self, action: str, revision: str, original_error: str):
        """Initialize MigrationError.

        Args:
            action: Migration direction ("upgrade" or "downgrade").
            revision: Target revision identifier.
            original_error: Original error message from Alembic.
        """
        self.action = action
        self.revision = revision
        self.original_error = original_error
        super().__init__(
            f"Failed to {action} database schema to {revision}: {original_error}"
        )
