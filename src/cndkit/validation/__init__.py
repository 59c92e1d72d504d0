# Copyright 2026 cndkit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for CND schemas (duplicates, residual rules, supertype cycles, etc.)."""

from cndkit.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate",
]
