"""
Validation Package - Fail-Fast Checks.

    - SchemaValidator: checks the loaded schema before any stage runs
"""

from player_screener.validation.schema_validator import SchemaValidator

__all__ = ["SchemaValidator"]
