from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    NamedTuple,
    Optional,
    Union,
)

from graphql import DirectiveLocation, GraphQLResolveInfo

from gqlhooks.readers.graphql import read_directive_definition

if TYPE_CHECKING:
    from gqlhooks.context import ExecutionContext


class ResolverPayload(NamedTuple):
    """Arguments of a single field resolver call"""

    root: Any
    args: Dict[str, Any]
    context: Any
    info: GraphQLResolveInfo


DirectiveArgs = Dict[str, Any]

ValidationFunc = Callable[
    ["ExecutionContext", DirectiveArgs, ResolverPayload],
    Union[None, Awaitable[None]],
]
TransformationFunc = Callable[
    ["ExecutionContext", DirectiveArgs, ResolverPayload, Any],
    Any,
]


@dataclass(frozen=True)
class SchemaDirectiveHook:
    """Pairs a schema directive definition with the functions to run
    around resolvers of fields annotated with this directive.

    Example:

    .. code-block:: python

        def upper(execution_context, directive_args, payload, result):
            return result.upper() if isinstance(result, str) else result

        uppercase = SchemaDirectiveHook(
            schema="directive @uppercase on FIELD_DEFINITION",
            transformation=upper,
        )

    :param str schema: schema definition language fragment, must define
        exactly one directive allowed on ``FIELD_DEFINITION``; may also
        define types used by directive arguments
    :param validation: called before the resolver, rejects resolution
        by raising :py:class:`gqlhooks.error.Unauthorized` or
        :py:class:`gqlhooks.error.ValidationFailed`; may be a coroutine
        function
    :param transformation: called with the resolver result, returns the
        value to use instead; must be a plain function
    """

    schema: str
    validation: Optional[ValidationFunc] = None
    transformation: Optional[TransformationFunc] = None
    name: str = field(init=False)

    def __post_init__(self) -> None:
        definition = read_directive_definition(self.schema)
        locations = {loc.value for loc in definition.locations}
        if DirectiveLocation.FIELD_DEFINITION.name not in locations:
            raise ValueError(
                "Directive @{} must be allowed on {}, got: {}".format(
                    definition.name.value,
                    DirectiveLocation.FIELD_DEFINITION.name,
                    ", ".join(sorted(locations)),
                )
            )
        object.__setattr__(self, "name", definition.name.value)
