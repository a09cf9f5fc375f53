"""Core exception hierarchy for modeldoc.

This module provides a centralized exception hierarchy so that failures raised
while loading configuration, building a type universe or resolving a single
model can be told apart. All modeldoc exceptions inherit from ModelDocError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modeldoc.core.diagnostics import DiagnosticKind

# ============================================================================
# Base Exception
# ============================================================================


class ModelDocError(Exception):
    """Base exception for all modeldoc errors.

    Catch this to handle all modeldoc-specific errors.
    """

    pass


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(ModelDocError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("settings", "founded must be an integer")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the configuration section that is invalid
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(ModelDocError):
    """Raised when a value fails validation.

    Examples
    --------
    Example usage::

        raise ValidationError("key_pattern", "is not a valid regular expression", value="[")
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the field that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


class ResourceNotFoundError(ModelDocError):
    """Raised when a required resource cannot be found.

    Examples
    --------
    Example usage::

        raise ResourceNotFoundError("configuration key", "workers", ["modules", "output"])
    """

    def __init__(
        self, resource_type: str, resource_id: str, available: list[str] | None = None
    ) -> None:
        """Initialize resource not found error.

        Args
        ----
            resource_type: Type of resource (e.g., "universe", "module", "declaration")
            resource_id: Identifier of the missing resource
            available: List of available resources (optional)
        """
        msg = f"{resource_type.title()} '{resource_id}' not found"
        if available:
            msg += f". Available: {', '.join(available[:5])}"
            if len(available) > 5:
                msg += f" ... and {len(available) - 5} more"
        super().__init__(msg)
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.available = available


# ============================================================================
# Engine Errors
# ============================================================================


class ModelResolutionError(ModelDocError):
    """Raised when a single model cannot be documented.

    The assembler catches this, records the diagnostic and moves on to the
    next candidate, so it never aborts a run.

    Examples
    --------
    Example usage::

        raise ModelResolutionError(
            DiagnosticKind.NO_FACTORY_OPERATION, "demo.Widget", "missing factory method"
        )
    """

    def __init__(self, kind: DiagnosticKind, subject: str, reason: str) -> None:
        """Initialize model resolution error.

        Args
        ----
            kind: Diagnostic kind describing the failure
            subject: Qualified name of the model declaration
            reason: Human-readable explanation
        """
        super().__init__(f"{kind} for '{subject}': {reason}")
        self.kind = kind
        self.subject = subject
        self.reason = reason


class TypeUniverseError(ModelDocError):
    """Raised when the type universe cannot be constructed or queried.

    This is the only run-fatal error: it aborts the whole invocation.

    Examples
    --------
    Example usage::

        raise TypeUniverseError("could not import module 'demo.models'")
    """

    pass


__all__ = [
    "ModelDocError",
    "ConfigurationError",
    "ValidationError",
    "ResourceNotFoundError",
    "ModelResolutionError",
    "TypeUniverseError",
]
