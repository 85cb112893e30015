"""
Condition evaluation engine.
"""

from collections.abc import Mapping
from typing import Any, List, Optional

from ..shared.config import EngineConfig, get_config
from ..shared.logging import get_logger
from ..shared.metrics import EngineMetrics
from .convert import tree_to_chain
from .evaluator import evaluate_leaf
from .models import ChainLink, Condition, ConditionChain, Logic, NodeKind
from .registry import OperatorRegistry, OperatorValidator


class ConditionEngine:
    """Evaluates condition trees and chains against data records.

    The engine holds no per-call state. Its only shared state is the
    custom operator registry, which may be injected so several engines
    can share one table, or kept separate for isolation.
    """

    def __init__(
        self,
        registry: Optional[OperatorRegistry] = None,
        metrics: Optional[EngineMetrics] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.logger = get_logger("condition_engine.engine")
        self.config = config or get_config()
        if metrics is None:
            metrics = EngineMetrics(enabled=self.config.metrics_enabled)
        self.metrics = metrics
        self.registry = registry if registry is not None else OperatorRegistry(metrics=metrics)

    # Custom operators

    def register_operator(self, operator: str, validator: OperatorValidator) -> None:
        """Register a custom operator. See OperatorRegistry.register."""
        self.registry.register(operator, validator)

    def unregister_operator(self, operator: str) -> bool:
        return self.registry.unregister(operator)

    def list_operators(self) -> List[str]:
        return self.registry.list_operators()

    # Evaluation

    def evaluate(self, condition: Condition, data: Optional[Mapping]) -> bool:
        """Evaluate a condition tree."""
        self.metrics.record_evaluation("tree")
        return self._evaluate_node(condition, data)

    def evaluate_chain(self, chain: ConditionChain, data: Optional[Mapping]) -> bool:
        """Evaluate a condition chain."""
        self.metrics.record_evaluation("chain")
        return self._evaluate_chain(chain, data)

    def evaluate_either(self, condition: Any, data: Optional[Mapping]) -> bool:
        """Evaluate a tree, a chain or a single chain link; anything else is false."""
        if isinstance(condition, Condition):
            return self.evaluate(condition, data)
        if isinstance(condition, ConditionChain):
            return self.evaluate_chain(condition, data)
        if isinstance(condition, ChainLink):
            return self.evaluate_chain(ConditionChain(conditions=[condition]), data)

        self.logger.debug("Unsupported condition type", type=type(condition).__name__)
        return False

    def evaluate_leaf(self, key: str, operator: Any, value: Any, data: Optional[Mapping]) -> bool:
        """Evaluate a single (key, operator, value) condition."""
        return evaluate_leaf(
            key, operator, value, data,
            self.registry,
            metrics=self.metrics,
            log_faults=self.config.log_contained_faults
        )

    def convert_tree_to_chain(self, condition: Condition) -> ConditionChain:
        return tree_to_chain(condition)

    def _evaluate_node(self, node: Condition, data: Optional[Mapping]) -> bool:
        kind = node.kind

        if kind == NodeKind.GROUP:
            if node.logic == Logic.AND:
                return all(self._evaluate_node(child, data) for child in node.children)
            return any(self._evaluate_node(child, data) for child in node.children)

        if kind == NodeKind.LEAF:
            return self.evaluate_leaf(node.key, node.operator, node.value, data)

        # Empty or malformed nodes are the identity: always true
        return True

    def _evaluate_chain(self, chain: ConditionChain, data: Optional[Mapping]) -> bool:
        links = chain.conditions
        if not links:
            return True

        result = self._evaluate_link(links[0], data)

        # Left fold, no precedence; every link is evaluated
        for previous, link in zip(links, links[1:]):
            current = self._evaluate_link(link, data)
            if previous.next_logic == Logic.OR:
                result = result or current
            else:
                result = result and current

        return result

    def _evaluate_link(self, link: ChainLink, data: Optional[Mapping]) -> bool:
        if link.group is not None:
            return self._evaluate_chain(link.group, data)
        return self.evaluate_leaf(link.key, link.operator, link.value, data)
