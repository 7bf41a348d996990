import logging
from inspect import isawaitable
from typing import Any, Awaitable, Callable, Iterator, Optional

from graphql import GraphQLResolveInfo

from gqlhooks.context import ExecutionContext
from gqlhooks.directives import (
    DirectiveArgs,
    ResolverPayload,
    SchemaDirectiveHook,
    decode_directive_args,
    get_field_directive,
)
from gqlhooks.error import DirectiveConfigurationError
from gqlhooks.extensions.base_extension import Extension

log = logging.getLogger(__name__)

Resolver = Callable[..., Any]


class DirectiveMiddleware:
    """Runs hooks of a single directive around field resolvers.

    Created per operation, holds no per-field state.
    """

    def __init__(
        self,
        hook: SchemaDirectiveHook,
        execution_context: ExecutionContext,
        *,
        debug: bool = False,
        logger: logging.Logger = log,
    ) -> None:
        self.hook = hook
        self.execution_context = execution_context
        self.debug = debug
        self.log = logger

    def prepare(self, info: GraphQLResolveInfo) -> Optional[DirectiveArgs]:
        """Returns decoded directive arguments if the field is annotated
        with the directive, None if resolver should run untouched"""
        node = get_field_directive(info, self.hook.name)
        if node is None:
            return None

        registry = self.execution_context.directives
        definition = registry.lookup(node.name.value) if registry else None
        if definition is None:
            msg = "Directive @{} on {}.{} is not defined in schema".format(
                node.name.value, info.parent_type.name, info.field_name
            )
            if self.debug:
                raise DirectiveConfigurationError(msg)
            self.log.warning(msg)
            return None

        return decode_directive_args(definition, node, info.variable_values)

    def transform(
        self,
        directive_args: DirectiveArgs,
        payload: ResolverPayload,
        result: Any,
    ) -> Any:
        if self.hook.transformation is None:
            return result

        value = self.hook.transformation(
            self.execution_context, directive_args, payload, result
        )
        if isawaitable(value):
            close = getattr(value, "close", None)
            if close is not None:
                close()
            raise TypeError(
                "Transformation of directive @{} must not be async".format(
                    self.hook.name
                )
            )
        return value

    def resolve(
        self,
        next_: Resolver,
        root: Any,
        info: GraphQLResolveInfo,
        **args: Any,
    ) -> Any:
        directive_args = self.prepare(info)
        if directive_args is None:
            return next_(root, info, **args)

        payload = ResolverPayload(root, args, info.context, info)
        self.log.debug(
            "Directive @%s applied to %s.%s with %r",
            self.hook.name,
            info.parent_type.name,
            info.field_name,
            directive_args,
        )

        if self.hook.validation is not None:
            outcome = self.hook.validation(
                self.execution_context, directive_args, payload
            )
            if isawaitable(outcome):
                return self._resolve_validated(
                    outcome, next_, directive_args, payload
                )

        return self._complete(
            next_(root, info, **args), directive_args, payload
        )

    def _complete(
        self,
        result: Any,
        directive_args: DirectiveArgs,
        payload: ResolverPayload,
    ) -> Any:
        if isawaitable(result):
            return self._transform_awaited(result, directive_args, payload)
        return self.transform(directive_args, payload, result)

    async def _transform_awaited(
        self,
        result: Awaitable[Any],
        directive_args: DirectiveArgs,
        payload: ResolverPayload,
    ) -> Any:
        return self.transform(directive_args, payload, await result)

    async def _resolve_validated(
        self,
        outcome: Awaitable[None],
        next_: Resolver,
        directive_args: DirectiveArgs,
        payload: ResolverPayload,
    ) -> Any:
        await outcome
        result = next_(payload.root, payload.info, **payload.args)
        if isawaitable(result):
            result = await result
        return self.transform(directive_args, payload, result)


class SchemaDirectiveExtension(Extension):
    """Applies a :py:class:`gqlhooks.directives.SchemaDirectiveHook` to
    every field annotated with its directive.

    Directive definition from the hook is added to the schema when schema
    is built from definition language source.

    Example:

    .. code-block:: python

        schema = Schema(type_defs, resolvers, extensions=[
            SchemaDirectiveExtension(auth),
            SchemaDirectiveExtension(uppercase),
        ])

    When several directives on the same field transform the result, the
    extension listed last is applied last.

    :param hook: directive hook
    :param bool debug: raise
        :py:class:`gqlhooks.error.DirectiveConfigurationError` when the
        directive is not defined in the schema instead of logging a warning
        and leaving fields untouched
    :param logger: logger to report directive activity to
    """

    def __init__(
        self,
        hook: SchemaDirectiveHook,
        *,
        debug: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.hook = hook
        self.debug = debug
        self.log = logger or log

    def on_init(self, execution_context: ExecutionContext) -> Iterator[None]:
        execution_context.type_defs = execution_context.type_defs + (
            self.hook.schema,
        )
        execution_context.directive_hooks = (
            execution_context.directive_hooks + (self.hook,)
        )

        yield

        registry = execution_context.directives
        # schema was not built
        if registry is None:
            return
        if registry.lookup(self.hook.name) is None:
            msg = "Directive @{} is not defined in schema".format(
                self.hook.name
            )
            if self.debug:
                raise DirectiveConfigurationError(msg)
            self.log.warning(msg)

    def on_execute(self, execution_context: ExecutionContext) -> Iterator[None]:
        execution_context.middleware = execution_context.middleware + (
            DirectiveMiddleware(
                self.hook,
                execution_context,
                debug=self.debug,
                logger=self.log,
            ),
        )
        yield
