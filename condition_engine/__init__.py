"""
Condition evaluation engine.

Evaluates boolean conditions against loosely typed key/value data, for
rule engines, filters and access-control checks.

The module-level functions operate on a default engine built on first
use. Applications that need isolated operator tables should construct
their own ``ConditionEngine`` with its own ``OperatorRegistry``.
"""

import threading
from typing import Any, List, Optional

from .rules.coercion import to_number, to_string
from .rules.engine import ConditionEngine
from .rules.models import (
    ChainLink, Condition, ConditionChain, Logic, NodeKind, Operator,
    and_group, condition_group, condition_with_logic, group_with_logic,
    new_condition, or_group
)
from .rules.registry import OperatorRegistry, OperatorValidator

__version__ = "1.0.0"

__all__ = [
    "ChainLink", "Condition", "ConditionChain", "ConditionEngine", "Logic",
    "NodeKind", "Operator", "OperatorRegistry", "OperatorValidator",
    "and_group", "condition_group", "condition_with_logic",
    "convert_tree_to_chain", "evaluate", "evaluate_chain", "evaluate_either",
    "get_default_engine", "group_with_logic", "list_operators",
    "new_condition", "or_group", "register_operator", "to_number",
    "to_string", "unregister_operator",
]

_default_engine: Optional[ConditionEngine] = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> ConditionEngine:
    """Return the process-wide default engine."""
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = ConditionEngine()
    return _default_engine


def evaluate(condition: Condition, data) -> bool:
    return get_default_engine().evaluate(condition, data)


def evaluate_chain(chain: ConditionChain, data) -> bool:
    return get_default_engine().evaluate_chain(chain, data)


def evaluate_either(condition: Any, data) -> bool:
    return get_default_engine().evaluate_either(condition, data)


def register_operator(operator: str, validator: OperatorValidator) -> None:
    get_default_engine().register_operator(operator, validator)


def unregister_operator(operator: str) -> bool:
    return get_default_engine().unregister_operator(operator)


def list_operators() -> List[str]:
    return get_default_engine().list_operators()


def convert_tree_to_chain(condition: Condition) -> ConditionChain:
    return get_default_engine().convert_tree_to_chain(condition)
