"""
Shared utilities for the condition engine.

This package aggregates the ambient building blocks used by the rules
core:

- config: Engine configuration via pydantic-settings
- logging: Structured logging (structlog)
- errors: Canonical error types
- metrics: Prometheus metrics helpers

Do not import from condition_engine.rules into shared/.
"""
