"""
Shared error handling for the condition engine.
"""

from typing import Dict, Any, Optional


class ConditionEngineError(Exception):
    """Base exception for the condition engine."""
    
    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain error payload."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class OperatorRegistrationError(ConditionEngineError):
    """Misuse of the custom operator registry."""
    
    def __init__(self, message: str = "Operator registration failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("OPERATOR_REGISTRATION_ERROR", message, details)


class InvalidValidatorError(OperatorRegistrationError, TypeError):
    """A custom operator was registered without a callable validator."""
    
    def __init__(self, operator: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Custom operator '{operator}' requires a callable validator",
            {"operator": operator, **(details or {})}
        )
        self.code = "INVALID_VALIDATOR"


class ReservedOperatorError(OperatorRegistrationError, ValueError):
    """A custom operator tried to claim a built-in identifier."""
    
    def __init__(self, operator: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Operator '{operator}' is built in and cannot be registered or replaced",
            {"operator": operator, **(details or {})}
        )
        self.code = "RESERVED_OPERATOR"
