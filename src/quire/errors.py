"""Quire Error Hierarchy.

Provides a structured error hierarchy for block document operations:
- QuireError: Base exception for all library errors
- ValidationError: Input validation failures
- OutOfRangeError: Index outside a block list (caller bug)
- UnknownBlockTypeError: Type tag outside the supported block types
- PropertiesMismatchError: Type-specific properties that belong to another type

Each error type includes:
- Descriptive message
- Optional field for context
- Recoverable flag for retry logic
- Structured representation for host responses

Usage:
    from quire.errors import OutOfRangeError

    try:
        blocks = move_block(blocks, 0, 12)
    except OutOfRangeError as e:
        logger.error(e.to_dict())
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Base Classes
# =============================================================================


class QuireError(Exception):
    """Base exception for all Quire errors.

    Attributes:
        message: Human-readable error description
        recoverable: Whether the operation can be retried
        context: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        *,
        recoverable: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured dictionary for host responses."""
        return {
            "type": type(self).__name__.lower().replace("error", ""),
            "message": self.message,
            "recoverable": self.recoverable,
            **{k: v for k, v in self.context.items() if v is not None},
        }


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(QuireError):
    """Input validation failed.

    Example:
        raise ValidationError("Block id is required", field="id")
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if constraint:
            context["constraint"] = constraint
        if value is not None:
            context["value"] = _truncate(str(value), 100)
        super().__init__(message, recoverable=False, context=context)
        self.field = field
        self.constraint = constraint


class OutOfRangeError(ValidationError, IndexError):
    """An index does not address an element of the block list."""

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        length: int | None = None,
        field: str | None = "index",
    ) -> None:
        super().__init__(
            message,
            field=field,
            constraint="out_of_range",
            context={"index": index, "length": length},
        )
        self.index = index
        self.length = length


class UnknownBlockTypeError(ValidationError):
    """Block type tag is not one of the supported types."""

    def __init__(self, block_type: Any) -> None:
        super().__init__(
            f"Unknown block type: {block_type!r}",
            field="type",
            value=block_type,
            constraint="block_type",
        )
        self.block_type = block_type


class PropertiesMismatchError(ValidationError):
    """Type-specific properties were given to a block of another type."""

    def __init__(self, block_type: str, properties_kind: str) -> None:
        super().__init__(
            f"{properties_kind} cannot be attached to a '{block_type}' block",
            field="properties",
            constraint="variant",
            context={"block_type": block_type, "properties": properties_kind},
        )


# =============================================================================
# Helpers
# =============================================================================


def _truncate(value: str | None, max_len: int) -> str | None:
    """Truncate a string value for safe logging."""
    if value is None:
        return None
    if len(value) <= max_len:
        return value
    return value[:max_len] + "..."
