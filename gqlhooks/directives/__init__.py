from .arguments import decode_directive_args
from .hook import (
    DirectiveArgs,
    ResolverPayload,
    SchemaDirectiveHook,
    TransformationFunc,
    ValidationFunc,
)
from .locator import (
    get_field_definition_node,
    get_field_directive,
    get_field_directives,
)
from .registry import DirectiveRegistry

__all__ = [
    "DirectiveArgs",
    "DirectiveRegistry",
    "ResolverPayload",
    "SchemaDirectiveHook",
    "TransformationFunc",
    "ValidationFunc",
    "decode_directive_args",
    "get_field_definition_node",
    "get_field_directive",
    "get_field_directives",
]
