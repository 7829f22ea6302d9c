"""
Compile a filter tree into an in-memory predicate over one record.

The tree is walked once; each leaf becomes a closure holding its
coerced condition value and its operator strategy, each composite a
closure over its children.  The returned predicate is pure and may be
shared between concurrent scans.

Composite nodes combine only their first two children unless
``evaluate_all_children`` is set; dropped children are logged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..exceptions import FilterParseError
from ..filters import FilterLogic
from ..metadata import FieldDataType
from ..values import coerce_condition, coerce_value
from .operators import DEFAULT_RECORD_REGISTRY

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from ..filters import RestFilter
    from ..metadata import FieldMetadata
    from .evaluator import RecordOperatorRegistry

    RecordPredicate = Callable[[Mapping[str, Any]], bool]

logger = logging.getLogger("metarest.sequential")

BINARY_COMPOSITE_ARITY = 2


def _accept_all(_record: Mapping[str, Any]) -> bool:
    return True


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_record_predicate(
    node: RestFilter | None,
    fields: Iterable[FieldMetadata],
    *,
    registry: RecordOperatorRegistry | None = None,
    evaluate_all_children: bool = False,
) -> RecordPredicate:
    """
    Build a ``record -> bool`` predicate from a filter tree.

    Args:
        node: Root of the filter tree; ``None`` accepts every record.
        fields: Metadata of the target entity, used for value coercion.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_RECORD_REGISTRY``.
        evaluate_all_children: Combine every child of a composite node
            instead of only the first two.

    Raises:
        FilterParseError: If a leaf value cannot be coerced to its field type.
    """
    if node is None:
        return _accept_all
    reg = registry or DEFAULT_RECORD_REGISTRY
    field_map = {f.name: f for f in fields}
    return _compile_node(node, field_map, reg, evaluate_all_children)


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _compile_node(
    node: RestFilter,
    fields: dict[str, FieldMetadata],
    registry: RecordOperatorRegistry,
    evaluate_all_children: bool,
) -> RecordPredicate:
    if node.is_composite:
        return _compile_composite(node, fields, registry, evaluate_all_children)
    return _compile_leaf(node, fields, registry)


def _compile_composite(
    node: RestFilter,
    fields: dict[str, FieldMetadata],
    registry: RecordOperatorRegistry,
    evaluate_all_children: bool,
) -> RecordPredicate:
    children = node.filters
    if not evaluate_all_children and len(children) > BINARY_COMPOSITE_ARITY:
        logger.warning(
            "Composite '%s' filter has %d children; only the first %d are evaluated",
            node.logic.value,
            len(children),
            BINARY_COMPOSITE_ARITY,
        )
        children = children[:BINARY_COMPOSITE_ARITY]

    compiled = [
        _compile_node(child, fields, registry, evaluate_all_children)
        for child in children
        if child is not None
    ]

    if node.logic is FilterLogic.OR:

        def any_of(record: Mapping[str, Any]) -> bool:
            return any(predicate(record) for predicate in compiled)

        return any_of

    def all_of(record: Mapping[str, Any]) -> bool:
        return all(predicate(record) for predicate in compiled)

    return all_of


def _compile_leaf(
    node: RestFilter,
    fields: dict[str, FieldMetadata],
    registry: RecordOperatorRegistry,
) -> RecordPredicate:
    name = node.field or ""
    operator = node.operator
    if operator is None:
        raise FilterParseError({name: ["Missing operator"]})
    strategy = registry.get(operator)
    if strategy is None:
        raise FilterParseError({name: [f"Unsupported operator: {operator.value}"]})

    field = fields.get(name)
    condition = coerce_condition(node, field)
    ignore_case = node.ignore_case and (
        field is None or field.type is FieldDataType.STRING
    )

    def leaf(record: Mapping[str, Any]) -> bool:
        value = coerce_value(record.get(name), field)
        return strategy.evaluate(value, condition, ignore_case)

    return leaf

