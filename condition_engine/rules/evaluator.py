"""
Single-condition evaluation.

Resolves one ``(key, operator, value)`` leaf against a data record.
Built-in operators are dispatched directly; any other identifier is
looked up in the custom operator registry. The only place an exception
is contained is the call into a custom validator.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from ..shared.logging import get_logger
from ..shared.metrics import EngineMetrics
from .coercion import compare_values, is_empty, is_equal, to_bool, to_string
from .models import Operator, STATE_OPERATORS, resolve_operator
from .registry import OperatorRegistry


logger = get_logger("condition_engine.evaluator")

_MISSING = object()


def is_in(value: Any, collection: Any) -> bool:
    """Value equals a sequence element or mapping key, or is a substring of a string."""
    if collection is None:
        return False
    if isinstance(collection, str):
        return to_string(value) in collection
    if isinstance(collection, Mapping):
        return any(is_equal(value, key) for key in collection)
    if isinstance(collection, (list, tuple, set, frozenset)):
        return any(is_equal(value, item) for item in collection)
    return False


def contains(haystack: Any, needle: Any) -> bool:
    if haystack is None or needle is None:
        return False
    return to_string(needle) in to_string(haystack)


def like_match(text: str, pattern: str) -> bool:
    """Match an SQL LIKE pattern (% any run, _ any one character) against all of ``text``.

    Two pointers; on a mismatch the pattern falls back to just after the
    last % seen and that % absorbs one more character. Runs in
    O(len(text) * len(pattern)) at worst, with no backtracking blowup.
    """
    t = p = 0
    star = -1
    mark = 0
    while t < len(text):
        if p < len(pattern) and pattern[p] != "%" and pattern[p] in ("_", text[t]):
            t += 1
            p += 1
        elif p < len(pattern) and pattern[p] == "%":
            star = p
            mark = t
            p += 1
        elif star >= 0:
            p = star + 1
            mark += 1
            t = mark
        else:
            return False

    while p < len(pattern) and pattern[p] == "%":
        p += 1
    return p == len(pattern)


def like(value: Any, pattern: Any, case_insensitive: bool = False) -> bool:
    if value is None or pattern is None:
        return False

    text = to_string(value)
    pat = to_string(pattern)
    if case_insensitive:
        text = text.casefold()
        pat = pat.casefold()

    return like_match(text, pat)


def starts_with(value: Any, prefix: Any) -> bool:
    if value is None or prefix is None:
        return False
    return to_string(value).startswith(to_string(prefix))


def ends_with(value: Any, suffix: Any) -> bool:
    if value is None or suffix is None:
        return False
    return to_string(value).endswith(to_string(suffix))


def between(value: Any, bounds: Any) -> bool:
    """Inclusive range check; ``bounds`` must be a two-element [min, max]."""
    if value is None or bounds is None:
        return False
    if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
        return False

    low, high = bounds
    return compare_values(value, low) >= 0 and compare_values(value, high) <= 0


def _evaluate_state(operator: Operator, field_value: Any, exists: bool) -> bool:
    if operator == Operator.IS_NULL:
        return not exists or field_value is None
    if operator == Operator.IS_NOT_NULL:
        return exists and field_value is not None
    if operator == Operator.IS_EMPTY:
        return is_empty(field_value)
    if operator == Operator.IS_NOT_EMPTY:
        return not is_empty(field_value)
    if operator == Operator.IS_TRUE:
        return to_bool(field_value)
    return not to_bool(field_value)


BUILTIN_COMPARISONS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: is_equal,
    Operator.NEQ: lambda v, e: not is_equal(v, e),
    Operator.GT: lambda v, e: compare_values(v, e) > 0,
    Operator.GTE: lambda v, e: compare_values(v, e) >= 0,
    Operator.LT: lambda v, e: compare_values(v, e) < 0,
    Operator.LTE: lambda v, e: compare_values(v, e) <= 0,
    Operator.IN: is_in,
    Operator.NIN: lambda v, e: not is_in(v, e),
    Operator.CONTAINS: contains,
    Operator.NCONTAINS: lambda v, e: not contains(v, e),
    Operator.LIKE: like,
    Operator.ILIKE: lambda v, e: like(v, e, case_insensitive=True),
    Operator.NLIKE: lambda v, e: not like(v, e),
    Operator.STARTS_WITH: starts_with,
    Operator.ENDS_WITH: ends_with,
    Operator.BETWEEN: between,
    Operator.NOT_BETWEEN: lambda v, e: not between(v, e),
}


def evaluate_leaf(
    key: str,
    operator: Any,
    value: Any,
    data: Optional[Mapping],
    registry: OperatorRegistry,
    metrics: Optional[EngineMetrics] = None,
    log_faults: bool = True,
) -> bool:
    """Evaluate a single condition against ``data``."""
    field_value = _MISSING if data is None else data.get(key, _MISSING)
    exists = field_value is not _MISSING
    if not exists:
        field_value = None

    builtin = resolve_operator(operator)

    if builtin in STATE_OPERATORS:
        return _evaluate_state(builtin, field_value, exists)

    if builtin is not None and exists:
        return BUILTIN_COMPARISONS[builtin](field_value, value)

    # Built-in comparisons need the key; everything else goes to the registry.
    # Custom operators see None for a missing key.
    if builtin is not None:
        return False

    validator = registry.get(operator)
    if validator is None:
        logger.debug("Unknown condition operator", operator=operator, key=key)
        if metrics is not None:
            metrics.record_unknown_operator()
        return False

    return _invoke_validator(operator, validator, field_value, value, metrics, log_faults)


def _invoke_validator(operator, validator, field_value, value, metrics, log_faults) -> bool:
    try:
        return bool(validator(field_value, value))
    except Exception as e:
        if log_faults:
            logger.warning(
                "Custom operator raised; condition treated as false",
                operator=operator,
                error=str(e),
                error_type=type(e).__name__
            )
        if metrics is not None:
            metrics.record_validator_fault(str(operator))
        return False
