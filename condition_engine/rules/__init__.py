"""
Condition rules package.

Defines the condition models and the evaluation engine. Conditions come
in two shapes: a nested AND/OR tree and a flat chain with an explicit
connective between each pair of links.

Modules of interest:
- models: Condition tree, condition chain, operators and builders.
- coercion: Numeric/string/boolean/time normalization used by operators.
- registry: Thread-safe table of runtime-registered custom operators.
- evaluator: Single (key, operator, value) evaluation.
- engine: Tree and chain evaluation.
- convert: Tree to chain conversion.

Evaluation is pure and synchronous: it never mutates the data record or
the condition, and it never raises.
"""
