"""
gqlhooks.endpoint.graphql
~~~~~~~~~~~~~~~~~~~~~~~~~

Translates GraphQL requests in their json form into schema execution and
execution results back into json responses.

Errors raised by directive hooks are reported with their code::

    {"message": "Oops, go away!", "path": ["secret"],
     "extensions": {"code": "UNAUTHORIZED"}}

"""

from asyncio import gather
from typing import Any, Dict, List, Optional, Union

from graphql import GraphQLError

from gqlhooks.error import DirectiveError
from gqlhooks.schema import ExecutionResult, Schema

Request = Dict[str, Any]
Response = Dict[str, Any]


def format_error(error: GraphQLError) -> Response:
    obj: Response = {"message": error.message}
    if error.path is not None:
        obj["path"] = list(error.path)
    if isinstance(error.original_error, DirectiveError):
        obj["extensions"] = {"code": error.original_error.code}
    return obj


def format_result(result: ExecutionResult) -> Response:
    response: Response = {"data": result.data}
    if result.errors:
        response["errors"] = [format_error(e) for e in result.errors]
    return response


def execution_args(data: Request) -> Dict[str, Any]:
    """Maps request json keys to :py:meth:`Schema.execute` arguments"""
    query = data.get("query")
    if not isinstance(query, str):
        raise GraphQLError("Request should contain a query string")
    return {
        "query": query,
        "variables": data.get("variables"),
        "operation_name": data.get("operationName"),
    }


class _BaseEndpoint:
    def __init__(self, schema: Schema, batching: bool = False):
        self.schema = schema
        self.batching = batching

    def _check_batch(self) -> None:
        if not self.batching:
            raise GraphQLError("Batching is not supported")


class GraphQLEndpoint(_BaseEndpoint):
    """Executes requests with :py:meth:`Schema.execute_sync`

    Example:

    .. code-block:: python

        endpoint = GraphQLEndpoint(schema, batching=True)
        endpoint.dispatch({"query": "{ me { id } }"}, context=ctx)
        endpoint.dispatch([{"query": "{ a }"}, {"query": "{ b }"}])

    """

    def execute(self, data: Request, context: Any = None) -> Response:
        result = self.schema.execute_sync(
            context=context, **execution_args(data)
        )
        return format_result(result)

    def dispatch(
        self,
        data: Union[Request, List[Request]],
        context: Optional[Any] = None,
    ) -> Union[Response, List[Response]]:
        if isinstance(data, list):
            self._check_batch()
            return [self.execute(item, context) for item in data]
        return self.execute(data, context)


class AsyncGraphQLEndpoint(_BaseEndpoint):
    """Executes requests with :py:meth:`Schema.execute`, batched requests
    run concurrently"""

    async def execute(self, data: Request, context: Any = None) -> Response:
        result = await self.schema.execute(
            context=context, **execution_args(data)
        )
        return format_result(result)

    async def dispatch(
        self,
        data: Union[Request, List[Request]],
        context: Optional[Any] = None,
    ) -> Union[Response, List[Response]]:
        if isinstance(data, list):
            self._check_batch()
            return list(
                await gather(*(self.execute(item, context) for item in data))
            )
        return await self.execute(data, context)
