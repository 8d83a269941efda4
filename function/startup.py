# ============================================================================
# STARTUP VALIDATION
# ============================================================================
# STATUS: Gateway - Startup validation
# PURPOSE: Validate environment before registering blueprints
# CREATED: 18 OCT 2026
# ============================================================================
"""
Startup Validation

Validates environment before registering blueprints: fail fast, log
clearly, degrade gracefully.

If validation fails, only /livez and /readyz endpoints are available.
Only configuration is checked, not connectivity; a network round trip
would be too slow for cold start.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from function.config import get_config

logger = logging.getLogger(__name__)


def _not_run(name: str) -> "ValidationResult":
    return ValidationResult(name, False, "NotRun", "Validation not yet run")


@dataclass
class ValidationResult:
    """Result of a startup validation check."""

    name: str
    passed: bool
    error_type: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class StartupState:
    """Track all startup validation checks."""

    env_vars: ValidationResult = field(default_factory=lambda: _not_run("env_vars"))
    table_storage: ValidationResult = field(default_factory=lambda: _not_run("table_storage"))
    service_bus: ValidationResult = field(default_factory=lambda: _not_run("service_bus"))

    def checks(self) -> List[ValidationResult]:
        return [self.env_vars, self.table_storage, self.service_bus]

    @property
    def all_passed(self) -> bool:
        """Check if all validations passed."""
        return all(c.passed for c in self.checks())

    def failed_checks(self) -> List[ValidationResult]:
        """Get list of failed validation checks."""
        return [c for c in self.checks() if not c.passed]

    def failed_check_names(self) -> List[str]:
        """Get names of failed checks."""
        return [c.name for c in self.failed_checks()]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "all_passed": self.all_passed,
            "checks": {
                c.name: {
                    "passed": c.passed,
                    "error": c.error_message if not c.passed else None,
                }
                for c in self.checks()
            },
        }


# Global singleton
STARTUP_STATE = StartupState()


def validate_startup() -> bool:
    """
    Run all startup validation checks.

    Returns True if all checks pass.
    Updates global STARTUP_STATE with results.
    """
    logger.info("Starting validation checks...")

    # 1. Environment Variables
    STARTUP_STATE.env_vars = _validate_env_vars()
    _log_result(STARTUP_STATE.env_vars, "Environment variables")

    # 2. Table Storage (only if env vars passed)
    if STARTUP_STATE.env_vars.passed:
        STARTUP_STATE.table_storage = _validate_table_storage()
        _log_result(STARTUP_STATE.table_storage, "Table Storage configuration")
    else:
        STARTUP_STATE.table_storage = ValidationResult(
            name="table_storage",
            passed=False,
            error_type="Skipped",
            error_message="Skipped due to env_vars failure",
        )

    # 3. Service Bus Configuration
    STARTUP_STATE.service_bus = _validate_service_bus()
    _log_result(STARTUP_STATE.service_bus, "Service Bus configuration")

    # Summary
    if STARTUP_STATE.all_passed:
        logger.info("All validation checks PASSED")
    else:
        logger.error(f"Validation FAILED: {STARTUP_STATE.failed_check_names()}")

    return STARTUP_STATE.all_passed


def _log_result(result: ValidationResult, label: str) -> None:
    if result.passed:
        logger.info(f"  [PASS] {label}")
    else:
        logger.error(f"  [FAIL] {label}: {result.error_message}")


def _validate_env_vars() -> ValidationResult:
    """Validate required environment variables."""
    config = get_config()

    if not config.has_table_config:
        return ValidationResult(
            name="env_vars",
            passed=False,
            error_type="MissingEnvVar",
            error_message="AzureWebJobsStorage, TABLES_CONNECTION_STRING or TABLES_ACCOUNT_URL required",
        )

    return ValidationResult(name="env_vars", passed=True)


def _validate_table_storage() -> ValidationResult:
    """Validate the Table Storage settings are usable."""
    tables = get_config().tables

    if tables.use_connection_string:
        if "AccountName=" not in tables.connection_string and "UseDevelopmentStorage=true" not in tables.connection_string:
            return ValidationResult(
                name="table_storage",
                passed=False,
                error_type="InvalidConnectionString",
                error_message="Connection string has no AccountName",
            )
        return ValidationResult(name="table_storage", passed=True)

    if not tables.account_url.startswith("https://"):
        return ValidationResult(
            name="table_storage",
            passed=False,
            error_type="InvalidAccountUrl",
            error_message=f"TABLES_ACCOUNT_URL must be an https URL, got {tables.account_url!r}",
        )
    return ValidationResult(name="table_storage", passed=True)


def _validate_service_bus() -> ValidationResult:
    """
    Validate Service Bus configuration.

    Note: We only validate config is present, not connectivity.
    """
    config = get_config()

    if config.has_service_bus_config:
        return ValidationResult(name="service_bus", passed=True)

    return ValidationResult(
        name="service_bus",
        passed=False,
        error_type="MissingConfig",
        error_message="SERVICE_BUS_NAMESPACE or ServiceBusConnection required",
    )


__all__ = ["STARTUP_STATE", "validate_startup", "ValidationResult", "StartupState"]
