# ============================================================================
# BASE REPOSITORY - ERROR HANDLING PATTERNS
# ============================================================================
# STATUS: Infrastructure - Base repository patterns
# PURPOSE: Common error wrapping and logging for table repositories
# CREATED: 18 OCT 2026
# ============================================================================
"""
Base Repository Patterns

Base class that provides common infrastructure for all repositories:
- Consistent error handling with a context manager
- Standardized operation logging

Expected outcomes (row missing, precondition failed) are handled inside the
concrete repository and returned as values. Anything that escapes the
error context is a transport failure and is re-raised as RepositoryError,
so HTTP triggers answer 500 and queue triggers let Service Bus redeliver.
"""

import logging
from abc import ABC
from contextlib import contextmanager
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository operations (transport failures)."""

    def __init__(self, message: str, operation: str = None, entity_id: str = None):
        self.operation = operation
        self.entity_id = entity_id
        super().__init__(message)


class BaseRepository(ABC):
    """
    Abstract base repository with common patterns.

    Provides:
    - Error context manager for consistent error handling
    - Standardized logging

    Subclasses implement storage-specific operations.
    """

    def __init__(self):
        """Initialize base repository."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.debug(f"{self.__class__.__name__} initialized")

    @contextmanager
    def _error_context(self, operation: str, entity_id: Optional[str] = None):
        """
        Context manager for consistent error handling.

        Wraps repository operations with standardized logging. All
        exceptions are logged with context before being re-raised as
        RepositoryError. Works around awaited calls as well, since the
        with block only observes the exception once it surfaces.

        Args:
            operation: Human-readable description of the operation
            entity_id: Optional entity ID for context

        Example:
            with self._error_context("product creation", product_id):
                await self.table.create_entity(entity)
        """
        try:
            yield
        except RepositoryError:
            raise
        except Exception as e:
            error_msg = f"{operation} failed"
            if entity_id:
                error_msg += f" for {entity_id}"
            error_msg += f": {e}"
            self.logger.error(error_msg)
            raise RepositoryError(error_msg, operation=operation, entity_id=entity_id) from e

    def _log_operation(
        self,
        success: bool,
        operation: str,
        entity_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log operation result with consistent formatting.

        Format:
            Success: "operation: entity_id | details"
            Failure: "operation failed: entity_id | details"
        """
        # Truncate long IDs for readability
        short_id = entity_id[:16] + "..." if len(entity_id) > 16 else entity_id

        if success:
            msg = f"{operation}: {short_id}"
        else:
            msg = f"{operation} failed: {short_id}"

        if details:
            msg += f" | {details}"

        if success:
            self.logger.info(msg)
        else:
            self.logger.warning(msg)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "BaseRepository",
    "RepositoryError",
]
