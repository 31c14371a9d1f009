"""Schema engine: attribute definitions, per-type registries, and default resolution."""

from superdict.schema.attributes import AttributeDefinition, Transform, check_options
from superdict.schema.defaults import (
    DefaultKind,
    apply_defaults,
    callable_arity,
    classify_default,
    resolve_default,
)
from superdict.schema.registry import AfterSetCallback, SchemaRegistry

__all__ = [
    "AfterSetCallback",
    "AttributeDefinition",
    "DefaultKind",
    "SchemaRegistry",
    "Transform",
    "apply_defaults",
    "callable_arity",
    "check_options",
    "classify_default",
    "resolve_default",
]
