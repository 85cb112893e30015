"""
Condition data models for the condition engine.

Two shapes are supported:

- ``Condition``: the nested tree form. A node is either a group
  (``logic`` + ``children``) or a leaf (``key`` + ``operator`` + ``value``).
- ``ConditionChain``: the flat form. An ordered list of ``ChainLink``
  entries joined pairwise by each link's ``next_logic``.

Field names match the wire representation, so a serialization layer can
build these with ``model_validate``.
"""

from typing import Any, List, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Logic(str, Enum):
    """Logical connectives."""
    AND = "AND"
    OR = "OR"


class Operator(str, Enum):
    """Built-in condition operators."""
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NIN = "nin"
    CONTAINS = "contains"
    NCONTAINS = "ncontains"
    IS_NULL = "isnull"
    IS_NOT_NULL = "isnotnull"
    IS_EMPTY = "isempty"
    IS_NOT_EMPTY = "isnotempty"
    IS_TRUE = "istrue"
    IS_FALSE = "isfalse"
    LIKE = "like"
    ILIKE = "ilike"
    NLIKE = "nlike"
    STARTS_WITH = "startswith"
    ENDS_WITH = "endswith"
    BETWEEN = "between"
    NOT_BETWEEN = "notbetween"


# Symbolic spellings accepted for the comparison operators
OPERATOR_ALIASES = {
    "==": Operator.EQ,
    "!=": Operator.NEQ,
    ">": Operator.GT,
    ">=": Operator.GTE,
    "<": Operator.LT,
    "<=": Operator.LTE,
}

# Operators that are defined whether or not the key is present
STATE_OPERATORS = frozenset({
    Operator.IS_NULL,
    Operator.IS_NOT_NULL,
    Operator.IS_EMPTY,
    Operator.IS_NOT_EMPTY,
    Operator.IS_TRUE,
    Operator.IS_FALSE,
})


def resolve_operator(operator: Any) -> Optional[Operator]:
    """Map an operator identifier to a built-in, or None for custom/unknown ids."""
    if isinstance(operator, Operator):
        return operator
    if not isinstance(operator, str):
        return None
    try:
        return Operator(operator)
    except ValueError:
        return OPERATOR_ALIASES.get(operator)


def is_builtin_operator(operator: Any) -> bool:
    """Check whether an identifier is reserved for a built-in operator."""
    return resolve_operator(operator) is not None


def _operator_id(operator: Any) -> Any:
    if isinstance(operator, Operator):
        return operator.value
    return operator


class NodeKind(str, Enum):
    """Dynamic kind of a tree node."""
    GROUP = "group"
    LEAF = "leaf"
    EMPTY = "empty"


class Condition(BaseModel):
    """A node of the nested condition tree."""

    model_config = ConfigDict(frozen=True)

    logic: Optional[Logic] = None
    children: List["Condition"] = Field(default_factory=list)

    key: str = ""
    operator: str = ""
    value: Any = None

    @field_validator("operator", mode="before")
    @classmethod
    def normalize_operator(cls, value: Any) -> Any:
        return _operator_id(value)

    @property
    def kind(self) -> NodeKind:
        """Group if logic and children are set, leaf if key and operator are, else empty."""
        if self.logic is not None and self.children:
            return NodeKind.GROUP
        if self.key and self.operator:
            return NodeKind.LEAF
        return NodeKind.EMPTY


class ChainLink(BaseModel):
    """One entry of a condition chain: a leaf or a nested chain."""

    model_config = ConfigDict(frozen=True)

    key: str = ""
    operator: str = ""
    value: Any = None

    group: Optional["ConditionChain"] = None

    # Connects this link's result to the next link's result
    next_logic: Optional[Logic] = None

    @field_validator("operator", mode="before")
    @classmethod
    def normalize_operator(cls, value: Any) -> Any:
        return _operator_id(value)

    @property
    def is_group(self) -> bool:
        return self.group is not None


class ConditionChain(BaseModel):
    """Flat condition list folded left to right by per-link connectives."""

    model_config = ConfigDict(frozen=True)

    conditions: List[ChainLink] = Field(default_factory=list)


ChainLink.model_rebuild()


def new_condition(key: str, operator: Any, value: Any = None) -> Condition:
    """Create a leaf condition."""
    return Condition(key=key, operator=operator, value=value)


def and_group(*children: Condition) -> Condition:
    """Create a group that is true only if every child is true."""
    return Condition(logic=Logic.AND, children=list(children))


def or_group(*children: Condition) -> Condition:
    """Create a group that is true if any child is true."""
    return Condition(logic=Logic.OR, children=list(children))


def condition_group(*links: ChainLink) -> ConditionChain:
    """Create a condition chain from links."""
    return ConditionChain(conditions=list(links))


def condition_with_logic(key: str, operator: Any, value: Any = None,
                         next_logic: Optional[Logic] = None) -> ChainLink:
    """Create a leaf link joined to the next link by ``next_logic``."""
    return ChainLink(key=key, operator=operator, value=value, next_logic=next_logic)


def group_with_logic(chain: ConditionChain, next_logic: Optional[Logic] = None) -> ChainLink:
    """Create a nested-chain link joined to the next link by ``next_logic``."""
    return ChainLink(group=chain, next_logic=next_logic)
