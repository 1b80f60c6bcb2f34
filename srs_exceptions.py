"""
srs_exceptions.py

Central exception hierarchy for the SRS (Spatial Reasoning System).
Defines specialised exception classes for the failure modes of shape
storage, geometry validation and spatial queries.

Exception hierarchy:
    SRSException (base)
    ├── ShapeStoreException
    │   ├── UnknownShapeError
    │   └── DuplicateShapeError
    ├── GeometryException
    │   └── InvalidGeometryError
    ├── SpatialQueryException
    │   ├── UndefinedOrientationError
    │   └── UnsupportedQueryCombinationError
    └── ConfigurationException
        └── InvalidConfigError

All errors are deterministic logic errors: they are raised before any state
is touched and are never retried or coerced into a default relation.

Usage:
    from srs_exceptions import UnknownShapeError, SpatialQueryException

    try:
        result = dispatcher.query(QueryType.RCC_PP, 1, 2)
    except UnknownShapeError as e:
        logger.error(f"Shape lookup failed: {e}")
        logger.error(f"Context: {e.context}")
"""

from typing import Any, Dict, Optional


class SRSException(Exception):
    """
    Base exception for all SRS-specific errors.

    All SRS exceptions support:
    - Detailed error messages
    - Contextual information (dict)
    - Original exception chaining (via 'from' or original_exception)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ============================================================================
# SHAPE STORE EXCEPTIONS
# ============================================================================


class ShapeStoreException(SRSException):
    """Base exception for shape store bookkeeping errors."""


class UnknownShapeError(ShapeStoreException):
    """
    Requested shape identifier is not present in the store.

    Causes:
    - Shape was never inserted
    - Shape was removed before the query
    """

    def __init__(self, message: str, shape_id: Optional[int] = None, **kwargs):
        context = kwargs.get("context", {})
        context["shape_id"] = shape_id
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class DuplicateShapeError(ShapeStoreException):
    """
    A shape with the same identifier is already held by the store.

    Identifiers must be unique among currently held shapes; remove the
    existing shape first to reuse its id.
    """

    def __init__(self, message: str, shape_id: Optional[int] = None, **kwargs):
        context = kwargs.get("context", {})
        context["shape_id"] = shape_id
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# GEOMETRY EXCEPTIONS
# ============================================================================


class GeometryException(SRSException):
    """Base exception for geometric validation errors."""


class InvalidGeometryError(GeometryException):
    """
    Shape violates its variant invariants.

    Causes:
    - Circle radius not strictly positive or not finite
    - Polygon with fewer than 3 vertices
    - Polygon with zero area (all vertices collinear)
    - Non-finite coordinates
    """

    def __init__(
        self,
        message: str,
        shape_id: Optional[int] = None,
        shape_kind: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["shape_id"] = shape_id
        context["shape_kind"] = shape_kind
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# SPATIAL QUERY EXCEPTIONS
# ============================================================================


class SpatialQueryException(SRSException):
    """Base exception for relation query errors."""


class UndefinedOrientationError(SpatialQueryException):
    """
    Orientation cannot be determined.

    Causes:
    - Facing vector has zero length
    - Observer and target share the same reference point
    """

    def __init__(self, message: str, shape_id: Optional[int] = None, **kwargs):
        context = kwargs.get("context", {})
        context["shape_id"] = shape_id
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class UnsupportedQueryCombinationError(SpatialQueryException):
    """
    The requested relation kind is not implemented for the given inputs.

    Causes:
    - Query type not handled by any registered engine
    - Shape variant pairing unknown to the engine
    """

    def __init__(self, message: str, query_type: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        context["query_type"] = query_type
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================


class ConfigurationException(SRSException):
    """Base exception for configuration errors."""


class InvalidConfigError(ConfigurationException):
    """
    Invalid configuration.

    Causes:
    - Malformed YAML
    - Values of the wrong type or out of range
    """

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        context["config_key"] = config_key
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def wrap_exception(
    exc: Exception, srs_exception_class: type, message: str, **context
) -> SRSException:
    """
    Convert a generic exception into an SRS-specific exception.

    Args:
        exc: Original exception
        srs_exception_class: Target exception class (e.g. InvalidConfigError)
        message: Custom error message
        **context: Additional context information

    Returns:
        SRS-specific exception chained to the original exception

    Example:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise wrap_exception(e, InvalidConfigError, "Malformed config", path=path)
    """
    return srs_exception_class(message=message, context=context, original_exception=exc)


def get_user_friendly_message(exc: Exception, include_details: bool = False) -> str:
    """
    Generate a user-facing error message from an exception.

    Args:
        exc: Exception object
        include_details: Whether to append technical details (debug mode)

    Returns:
        Human-readable error message
    """
    friendly_messages = {
        UnknownShapeError: "[ERROR] The requested shape does not exist.",
        DuplicateShapeError: "[ERROR] A shape with this id already exists.",
        InvalidGeometryError: "[ERROR] The shape geometry is invalid.",
        UndefinedOrientationError: "[ERROR] The orientation is undefined for these shapes.",
        UnsupportedQueryCombinationError: "[ERROR] This query is not supported for these shapes.",
        InvalidConfigError: "[ERROR] Invalid configuration. Please check the settings.",
    }

    default_message = "[ERROR] An unexpected error occurred."

    user_message = friendly_messages.get(type(exc), default_message)

    if isinstance(exc, UnknownShapeError) and exc.context.get("shape_id") is not None:
        user_message = f"[ERROR] Shape {exc.context['shape_id']} does not exist."

    if include_details and isinstance(exc, SRSException):
        user_message += f"\n\nDetails: {exc.message}"
        if exc.context:
            user_message += f"\n   Context: {exc.context}"

    return user_message
