"""Error Hierarchy — typed, categorized exceptions for all ShirtShop failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are client mistakes; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope rendered by the global handler
    - No internal details leaked in user-facing messages (driver errors are logged, not returned)

Design Decisions:
    - Single hierarchy with ShirtShopError base: FastAPI global handler catches all (ADR: uniform error shape)
    - User-facing messages in Thai: the mobile client shows them verbatim
    - Duplicate email answers 400 (not 409): the client already branches on 400 for registration
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """When the failure happened; rendered as the envelope timestamp."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ShirtShopError(Exception):
    """Base exception for all ShirtShop errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(ShirtShopError):
    """Request input missing or malformed beyond what the schema catches."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class MissingTokenError(ShirtShopError):
    """No bearer token on a protected route."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "ไม่ได้รับอนุญาต กรุณาเข้าสู่ระบบ",
            "AUTH_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidTokenError(ShirtShopError):
    """Bearer token failed signature or expiry verification."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "token ไม่ถูกต้องหรือหมดอายุ",
            "TOKEN_INVALID", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class InvalidCredentialsError(ShirtShopError):
    """Login password does not match the stored hash."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "รหัสผ่านไม่ถูกต้อง",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(ShirtShopError):
    """Requested resource does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateEmailError(ShirtShopError):
    """Email already belongs to another account."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            "Email นี้ถูกใช้ไปแล้ว",
            "EMAIL_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )
        self.email = email


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ShirtShopError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class StorageError(ShirtShopError):
    """Uploaded file could not be persisted."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"File storage failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
