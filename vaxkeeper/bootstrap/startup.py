from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from PySide6.QtWidgets import QMessageBox
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from vaxkeeper.infrastructure.db.engine import get_engine

REQUIRED_COLUMNS = {
    "patient": {"patient_id", "name", "age", "gender"},
    "vaccination_record": {"id", "patient_id", "vaccine_name", "manufacturer", "booster_due_date"},
}


PACKAGE_DIR = Path(__file__).resolve().parents[1]


def migrations_dir(package_dir: Path = PACKAGE_DIR) -> Path:
    return package_dir / "infrastructure" / "db" / "migrations"


def build_alembic_config(database_url: str, package_dir: Path = PACKAGE_DIR) -> Config:
    """Alembic config for the migrations shipped inside the package.

    No alembic.ini is read, so an installed copy migrates the same way as a checkout.
    """
    cfg = Config()
    cfg.set_main_option("script_location", str(migrations_dir(package_dir)))
    cfg.set_main_option("sqlalchemy.url", database_url)
    # Keep the application's logging configuration intact.
    cfg.attributes["configure_logger"] = False
    return cfg


def check_startup_prerequisites(package_dir: Path, db_file: Path) -> bool:
    if not (migrations_dir(package_dir) / "env.py").exists():
        QMessageBox.critical(
            None,
            "Error",
            "The migrations directory is missing. Check the application installation.",
        )
        return False
    try:
        test_file = db_file.parent / ".write_test"
        test_file.write_text("ok", encoding="utf-8")
        test_file.unlink(missing_ok=True)
    except OSError:
        logging.getLogger(__name__).exception("Database directory is not writable")
        QMessageBox.critical(
            None,
            "Error",
            f"No write access to the database directory: {db_file.parent}",
        )
        return False
    return True


def run_migrations(package_dir: Path, database_url: str, log_dir: Path, db_file: Path) -> bool:
    try:
        cfg = build_alembic_config(database_url, package_dir)
        command.upgrade(cfg, "head")
        return True
    except Exception:  # noqa: BLE001
        logger = logging.getLogger(__name__)
        logger.exception("Failed to run migrations")
        try:
            import traceback

            error_path = log_dir / "migration_error.log"
            error_path.parent.mkdir(parents=True, exist_ok=True)
            with error_path.open("a", encoding="utf-8") as handle:
                handle.write("\n--- Migration error ---\n")
                handle.write(f"DB: {db_file}\n")
                handle.write(f"Migrations: {migrations_dir(package_dir)}\n")
                handle.write(traceback.format_exc())
        except OSError:
            logger.exception("Failed to write migration error log")
        QMessageBox.critical(
            None,
            "Error",
            "Could not apply database migrations.\n"
            f"Details: {log_dir / 'migration_error.log'}",
        )
        return False


def ensure_schema_compatibility(database_url: str, db_file: Path) -> bool:
    engine = get_engine(database_url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        for table, required in REQUIRED_COLUMNS.items():
            if table not in tables:
                missing = required
            else:
                columns = {col["name"] for col in inspector.get_columns(table)}
                missing = required - columns
            if missing:
                logging.getLogger(__name__).error(
                    "DB schema mismatch in '%s' table. Missing columns: %s. DB path: %s",
                    table,
                    ", ".join(sorted(missing)),
                    db_file,
                )
                QMessageBox.critical(
                    None,
                    "Error",
                    f"The database table '{table}' does not match the expected structure.",
                )
                return False
        return True
    except SQLAlchemyError as exc:
        logging.getLogger(__name__).exception("Failed to verify database schema")
        QMessageBox.critical(
            None,
            "Error",
            f"Could not verify the database structure: {exc}",
        )
        return False
    finally:
        engine.dispose()


def initialize_database(
    *,
    package_dir: Path,
    db_file: Path,
    database_url: str,
    log_dir: Path,
) -> bool:
    if not check_startup_prerequisites(package_dir, db_file):
        return False
    if not run_migrations(package_dir, database_url, log_dir, db_file):
        return False
    return ensure_schema_compatibility(database_url, db_file)
