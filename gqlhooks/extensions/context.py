from typing import Any, Callable, Iterator

from gqlhooks.context import ExecutionContext
from gqlhooks.extensions.base_extension import Extension


class CustomContext(Extension):
    """Replaces operation context with the one returned by
    ``get_context``, called once per operation before execution.

    Directive hooks receive the replaced context in
    ``ResolverPayload.context``.
    """

    def __init__(
        self,
        get_context: Callable[[ExecutionContext], Any],
    ):
        self.get_context = get_context

    def on_execute(self, execution_context: ExecutionContext) -> Iterator[None]:
        execution_context.context = self.get_context(execution_context)
        yield
