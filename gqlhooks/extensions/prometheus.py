import time
from inspect import isawaitable
from typing import Any, Awaitable, Callable, Iterator, Optional

from graphql import GraphQLResolveInfo
from prometheus_client import Summary
from prometheus_client.metrics import MetricWrapperBase

from gqlhooks.context import ExecutionContext
from gqlhooks.directives import get_field_directives
from gqlhooks.extensions.base_extension import Extension


_METRIC = None


def _get_default_metric() -> Summary:
    global _METRIC
    if _METRIC is None:
        _METRIC = Summary(
            "graphql_directive_field_time",
            "Time to resolve fields annotated with directives (seconds)",
            ["schema", "type", "field"],
        )
    return _METRIC


class _MetricsMiddleware:
    def __init__(self, name: str, metric: MetricWrapperBase) -> None:
        self._name = name
        self._metric = metric

    def observe(self, info: GraphQLResolveInfo, start_time: float) -> None:
        duration = time.perf_counter() - start_time
        self._metric.labels(
            self._name, info.parent_type.name, info.field_name
        ).observe(duration)

    async def _observe_awaited(
        self,
        result: Awaitable[Any],
        info: GraphQLResolveInfo,
        start_time: float,
    ) -> Any:
        try:
            return await result
        finally:
            self.observe(info, start_time)

    def resolve(
        self,
        next_: Callable[..., Any],
        root: Any,
        info: GraphQLResolveInfo,
        **args: Any,
    ) -> Any:
        if not get_field_directives(info):
            return next_(root, info, **args)

        start_time = time.perf_counter()
        try:
            result = next_(root, info, **args)
        except Exception:
            self.observe(info, start_time)
            raise
        if isawaitable(result):
            return self._observe_awaited(result, info, start_time)
        self.observe(info, start_time)
        return result


class DirectiveMetrics(Extension):
    """Measures resolve time of fields annotated with directives,
    including time spent in directive hooks of extensions listed before
    this one.

    Example:

        Schema(type_defs, resolvers, extensions=[
            SchemaDirectiveExtension(auth),
            DirectiveMetrics("public"),
        ])

    :param str name: schema name, used as ``schema`` label value
    :param metric: prometheus metric with ``schema``, ``type`` and
        ``field`` labels, ``graphql_directive_field_time`` summary is used
        by default
    """

    def __init__(
        self,
        name: str,
        *,
        metric: Optional[MetricWrapperBase] = None,
    ):
        self._middleware = _MetricsMiddleware(
            name, metric or _get_default_metric()
        )

    def on_execute(self, execution_context: ExecutionContext) -> Iterator[None]:
        execution_context.middleware = execution_context.middleware + (
            self._middleware,
        )
        yield
