from __future__ import annotations

import inspect
from types import TracebackType
from typing import (
    TYPE_CHECKING,
    Callable,
    Iterator,
    List,
    Optional,
    Sequence,
    Type,
    Union,
)

if TYPE_CHECKING:
    from gqlhooks.context import ExecutionContext


Hook = Callable[["Extension", "ExecutionContext"], Iterator[None]]


class Extension:
    """Base class for plugging into schema construction and operation
    execution.

    Every hook is a generator which yields exactly once: code before
    ``yield`` runs before the step, code after ``yield`` runs after it.
    Async hooks are not supported.

    **Hook execution order:**

    ```
    Schema(...)
      on_init()         - schema is built
    Schema.execute(...)
      on_operation()    - whole operation
        on_parse()      - query string to graphql ast
        on_validate()   - graphql ast validated against the schema
        on_execute()    - graphql ast executed
    ```

    **ExecutionContext fields availability:**

    - on_init: ``schema`` and ``directives`` are set after ``yield``,
      ``type_defs`` and ``directive_hooks`` may be extended before it
    - on_operation: query_src, variables, operation_name, context,
      schema, directives
    - on_parse: after yield: graphql_document
    - on_validate: after yield: errors
    - on_execute: ``middleware`` may be extended before yield,
      result is set after yield

    Example:

    .. code-block:: python

        class Timing(Extension):
            def on_execute(self, execution_context):
                start = time.perf_counter()
                yield
                log.info("took %.3fs", time.perf_counter() - start)

    Extensions are shared between operations, keep per-operation state
    in the execution context or in local variables of the hook.
    """

    def on_init(  # type: ignore[return]
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        """Called once when the schema is built.

        It is a good place to contribute schema definition fragments and
        directive hooks.
        """
        yield None

    def on_operation(  # type: ignore[return]
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        """Called before and after the whole operation, wraps
        `on_parse`, `on_validate` and `on_execute` hooks."""
        yield None

    def on_parse(  # type: ignore[return]
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        """Called before and after the query is parsed.

        Query is parsed only if execution_context.graphql_document is
        still empty after this hook was entered.
        """
        yield None

    def on_validate(  # type: ignore[return]
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        """Called before and after the query is validated.

        Validation is skipped if execution_context.errors is already set,
        non-empty errors abort the operation.
        """
        yield None

    def on_execute(  # type: ignore[return]
        self, execution_context: ExecutionContext
    ) -> Iterator[None]:
        """Called before and after the query is executed.

        Resolver middleware added to execution_context.middleware before
        ``yield`` is used for this operation only.
        """
        yield None


class ExtensionsManager:
    """Runs extension hooks for a single schema build or operation"""

    def __init__(
        self,
        execution_context: ExecutionContext,
        extensions: Optional[Sequence[Union[Type[Extension], Extension]]],
    ):
        self.execution_context = execution_context
        self.extensions: List[Extension] = [
            ext if isinstance(ext, Extension) else ext()
            for ext in extensions or ()
        ]

    def _hooks(self, hook: Hook) -> "ExtensionHooks":
        return ExtensionHooks(
            hook.__name__, self.extensions, self.execution_context
        )

    def init(self) -> "ExtensionHooks":
        return self._hooks(Extension.on_init)

    def operation(self) -> "ExtensionHooks":
        return self._hooks(Extension.on_operation)

    def parsing(self) -> "ExtensionHooks":
        return self._hooks(Extension.on_parse)

    def validation(self) -> "ExtensionHooks":
        return self._hooks(Extension.on_validate)

    def execution(self) -> "ExtensionHooks":
        return self._hooks(Extension.on_execute)


def _call_once(
    func: Callable[[Extension, ExecutionContext], object],
    extension: Extension,
    execution_context: ExecutionContext,
) -> Iterator[None]:
    func(extension, execution_context)
    yield


class ExtensionHooks:
    """Runs the same hook of every extension around a single step.

    Hooks are entered in extension order and resumed in the same order
    when the step is done. Hooks overridden with plain functions are
    called once on enter.
    """

    __slots__ = ("hook_name", "_running")

    def __init__(
        self,
        hook_name: str,
        extensions: List[Extension],
        execution_context: ExecutionContext,
    ):
        self.hook_name = hook_name
        default_hook = getattr(Extension, hook_name)
        self._running: List[Iterator[None]] = []
        for extension in extensions:
            hook_fn = getattr(type(extension), hook_name)
            if hook_fn is default_hook:
                continue
            if inspect.isasyncgenfunction(
                hook_fn
            ) or inspect.iscoroutinefunction(hook_fn):
                raise RuntimeError(
                    f"Extension hook {extension}.{hook_name} is async."
                )
            if inspect.isgeneratorfunction(hook_fn):
                self._running.append(hook_fn(extension, execution_context))
            elif callable(hook_fn):
                self._running.append(
                    _call_once(hook_fn, extension, execution_context)
                )
            else:
                raise ValueError(
                    f"Hook {hook_name} on {extension} "
                    f"must be callable, received {hook_fn!r}"
                )

    def __enter__(self) -> None:
        for hook in self._running:
            next(hook)

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        for hook in self._running:
            next(hook, None)
