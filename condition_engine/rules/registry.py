"""
Custom operator registry.

The table is copy-on-write: a writer takes the lock, builds a new dict and
publishes it with a single reference assignment. Readers only load the
current reference, so lookups never block each other or wait on writers,
and a validator is always invoked with no lock held.
"""

import threading
from typing import Any, Callable, Dict, List, Optional

from ..shared.errors import InvalidValidatorError, ReservedOperatorError
from ..shared.logging import get_logger
from ..shared.metrics import EngineMetrics
from .models import is_builtin_operator


# (field_value, expected_value) -> bool
OperatorValidator = Callable[[Any, Any], bool]


class OperatorRegistry:
    """Thread-safe table of custom operators."""

    def __init__(self, metrics: Optional[EngineMetrics] = None):
        self.logger = get_logger("condition_engine.registry")
        self.metrics = metrics
        self._operators: Dict[str, OperatorValidator] = {}
        self._write_lock = threading.Lock()

    def register(self, operator: str, validator: OperatorValidator) -> None:
        """Register or replace a custom operator.

        Raises InvalidValidatorError if ``validator`` is missing or not
        callable, and ReservedOperatorError for built-in identifiers.
        """
        if validator is None or not callable(validator):
            raise InvalidValidatorError(str(operator))
        if is_builtin_operator(operator):
            raise ReservedOperatorError(str(operator))

        with self._write_lock:
            operators = dict(self._operators)
            replaced = operator in operators
            operators[operator] = validator
            self._operators = operators
            size = len(operators)

        self._publish_size(size)
        self.logger.info("Custom operator registered", operator=operator, replaced=replaced)

    def unregister(self, operator: str) -> bool:
        """Remove a custom operator. Returns False if it was not registered."""
        with self._write_lock:
            if operator not in self._operators:
                return False
            operators = dict(self._operators)
            del operators[operator]
            self._operators = operators
            size = len(operators)

        self._publish_size(size)
        self.logger.info("Custom operator unregistered", operator=operator)
        return True

    def get(self, operator: Any) -> Optional[OperatorValidator]:
        """Look up a validator without locking."""
        try:
            return self._operators.get(operator)
        except TypeError:
            # Unhashable identifiers can never be registered
            return None

    def list_operators(self) -> List[str]:
        """Snapshot of registered operator identifiers, in no particular order."""
        return list(self._operators)

    def clear(self) -> None:
        """Remove every custom operator."""
        with self._write_lock:
            self._operators = {}

        self._publish_size(0)
        self.logger.info("All custom operators cleared")

    def __contains__(self, operator: Any) -> bool:
        return self.get(operator) is not None

    def __len__(self) -> int:
        return len(self._operators)

    def _publish_size(self, size: int):
        if self.metrics is not None:
            self.metrics.set_custom_operators(size)
