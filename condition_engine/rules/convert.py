"""
Conversion from the nested tree form to the flat chain form.
"""

from typing import List

from .models import ChainLink, Condition, ConditionChain, NodeKind


def tree_to_chain(node: Condition) -> ConditionChain:
    """Convert a condition tree into an equivalent condition chain.

    A leaf becomes a one-link chain. A group becomes a chain of its
    converted children, each joined to the next by the group's logic; the
    last link carries no ``next_logic``. An empty node becomes an empty
    chain, which evaluates to true just like the node itself.
    """
    kind = node.kind

    if kind == NodeKind.LEAF:
        return ConditionChain(conditions=[
            ChainLink(key=node.key, operator=node.operator, value=node.value)
        ])

    if kind == NodeKind.EMPTY:
        return ConditionChain()

    links: List[ChainLink] = []
    last = len(node.children) - 1
    for index, child in enumerate(node.children):
        next_logic = node.logic if index < last else None

        if child.kind == NodeKind.LEAF:
            links.append(ChainLink(
                key=child.key,
                operator=child.operator,
                value=child.value,
                next_logic=next_logic
            ))
        else:
            links.append(ChainLink(group=tree_to_chain(child), next_logic=next_logic))

    return ConditionChain(conditions=links)
