"""
Shared metrics configuration for the condition engine.
"""

from typing import Dict, Any, Optional
import threading

from prometheus_client import Counter, Gauge, CollectorRegistry


class EngineMetrics:
    """Prometheus metrics for condition evaluation."""
    
    def __init__(self, registry: Optional[CollectorRegistry] = None, enabled: bool = True):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.enabled = enabled
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        if enabled:
            self._setup_metrics()
    
    def _setup_metrics(self):
        """Set up condition engine metrics."""
        self._metrics["evaluations_total"] = Counter(
            "condition_evaluations_total",
            "Total top-level condition evaluations",
            ["kind"],
            registry=self.registry
        )
        
        self._metrics["unknown_operator_total"] = Counter(
            "condition_unknown_operator_total",
            "Leaves resolved false because the operator is unknown",
            registry=self.registry
        )
        
        self._metrics["validator_faults_total"] = Counter(
            "condition_validator_faults_total",
            "Custom operator validators that raised during evaluation",
            ["operator"],
            registry=self.registry
        )
        
        self._metrics["custom_operators"] = Gauge(
            "condition_custom_operators",
            "Number of registered custom operators",
            registry=self.registry
        )
    
    def record_evaluation(self, kind: str):
        """Record a top-level evaluation of the given kind (tree or chain)."""
        if self.enabled:
            self._metrics["evaluations_total"].labels(kind=kind).inc()
    
    def record_unknown_operator(self):
        if self.enabled:
            self._metrics["unknown_operator_total"].inc()
    
    def record_validator_fault(self, operator: str):
        if self.enabled:
            self._metrics["validator_faults_total"].labels(operator=operator).inc()
    
    def set_custom_operators(self, count: int):
        if self.enabled:
            with self._lock:
                self._metrics["custom_operators"].set(count)
    
    def get_sample(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read back a sample value, mainly for diagnostics and tests."""
        return self.registry.get_sample_value(name, labels or {})
