"""
Application startup validation and initialization.

This module performs critical startup checks so the API never serves
requests in a degraded state: if the database cannot be reached, startup
is aborted.
"""

import logging
from typing import List, Tuple

import sqlalchemy as sa
from sqlalchemy.engine import Engine

from core.config import DEFAULT_JWT_SECRET, Settings
from core.database import check_connection, create_tables

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("users", "sweets")


class StartupError(RuntimeError):
    """Raised when the application cannot start safely"""


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self, engine: Engine, settings: Settings):
        self.engine = engine
        self.settings = settings
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_environment_config(self) -> bool:
        """Validate environment configuration"""
        if self.settings.jwt_secret_key == DEFAULT_JWT_SECRET:
            self.warnings.append("Using development JWT_SECRET_KEY - change for production")
        if self.settings.is_sqlite and self.settings.is_production:
            self.warnings.append("SQLite database configured in production")
        return True

    def check_database_connection(self) -> bool:
        """Check database connectivity"""
        try:
            check_connection(self.engine)
            logger.info("Database connection successful")
            return True
        except sa.exc.SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {e}")
            return False

    def check_required_tables(self) -> bool:
        """Create missing tables if allowed, then check they all exist"""
        try:
            if self.settings.create_tables_on_startup:
                create_tables(self.engine)

            existing_tables = sa.inspect(self.engine).get_table_names()
            missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
            if missing_tables:
                self.errors.append(f"Missing database tables: {', '.join(missing_tables)}")
                return False
            return True
        except sa.exc.SQLAlchemyError as e:
            self.errors.append(f"Could not check database tables: {e}")
            return False

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all validation checks; table checks need a reachable database"""
        all_passed = self.check_environment_config()

        logger.info("Running check: Database Connection")
        if self.check_database_connection():
            logger.info("Running check: Database Tables")
            all_passed = self.check_required_tables() and all_passed
        else:
            all_passed = False

        return all_passed, self.errors, self.warnings


def run_startup_checks(engine: Engine, settings: Settings) -> List[str]:
    """
    Run all startup validation checks.

    Returns:
        Warnings that did not prevent startup

    Raises:
        StartupError: if any check failed
    """
    logger.info("=" * 60)
    logger.info("Starting Sweet Shop API")
    logger.info(f"Environment: {settings.environment}")
    logger.info("=" * 60)

    validator = StartupValidator(engine, settings)
    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"Startup warning: {warning}")

    if not passed:
        for error in errors:
            logger.error(f"Startup error: {error}")
        raise StartupError("; ".join(errors))

    logger.info("All startup checks passed")
    return warnings


def configure_logging(settings: Settings) -> None:
    """Configure logging for the process"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
