from __future__ import annotations


class AppError(RuntimeError):
    """Base application-level error."""


class ValidationError(AppError):
    """Input validation failure; raised before any store access."""


class StoreError(AppError):
    """Statement failed in the database (connectivity, constraint, driver)."""
