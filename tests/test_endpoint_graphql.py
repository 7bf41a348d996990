import pytest

from graphql import GraphQLError, build_ast_schema, parse

from gqlhooks.endpoint.graphql import (
    AsyncGraphQLEndpoint,
    GraphQLEndpoint,
)
from gqlhooks.extensions import CustomContext, SchemaDirectiveExtension
from gqlhooks.schema import Schema

from tests.base import AUTH_SCHEMA, AUTH_TYPE_DEFS


TYPE_DEFS_SIMPLE = """
type Query {
    answer: String
    failing: String
}
"""


def failing(root, info):
    raise GraphQLError("Something went wrong")


@pytest.fixture(name="sync_schema")
def sync_schema_fixture():
    return Schema(
        TYPE_DEFS_SIMPLE,
        {"Query": {"answer": lambda root, info: "42", "failing": failing}},
    )


@pytest.fixture(name="async_schema")
def async_schema_fixture():
    async def answer(root, info):
        return info.context.get("default_answer") or "42"

    return Schema(TYPE_DEFS_SIMPLE, {"Query": {"answer": answer}})


def test_endpoint(sync_schema):
    endpoint = GraphQLEndpoint(sync_schema)
    result = endpoint.dispatch({"query": "{answer}"})
    assert result == {"data": {"answer": "42"}}


def test_endpoint_operation_name(sync_schema):
    endpoint = GraphQLEndpoint(sync_schema)
    result = endpoint.dispatch(
        {
            "query": "query A { answer } query B { __typename }",
            "operationName": "B",
            "variables": {},
        }
    )
    assert result == {"data": {"__typename": "Query"}}


@pytest.mark.parametrize("data", [{}, {"query": None}, {"query": 1}])
def test_endpoint_without_query(sync_schema, data):
    endpoint = GraphQLEndpoint(sync_schema)
    with pytest.raises(GraphQLError, match="should contain a query string"):
        endpoint.dispatch(data)


def test_endpoint_field_error(sync_schema):
    endpoint = GraphQLEndpoint(sync_schema)
    result = endpoint.dispatch({"query": "{answer failing}"})
    assert result == {
        "data": {"answer": "42", "failing": None},
        "errors": [{"message": "Something went wrong", "path": ["failing"]}],
    }


def test_endpoint_validation_error(sync_schema):
    endpoint = GraphQLEndpoint(sync_schema)
    result = endpoint.dispatch({"query": "{unknown}"})
    assert result == {
        "data": None,
        "errors": [
            {"message": "Cannot query field 'unknown' on type 'Query'."},
        ],
    }


def test_endpoint_unauthorized_code(auth, resolvers):
    schema = Schema(
        AUTH_TYPE_DEFS,
        resolvers,
        extensions=[
            SchemaDirectiveExtension(auth),
            CustomContext(lambda _: {"current_user": None}),
        ],
    )
    endpoint = GraphQLEndpoint(schema)
    result = endpoint.dispatch({"query": "{simple secretPassword}"})
    assert result == {
        "data": {"simple": "Hi", "secretPassword": None},
        "errors": [
            {
                "message": "Oops, go away!",
                "path": ["secretPassword"],
                "extensions": {"code": "UNAUTHORIZED"},
            }
        ],
    }


def test_endpoint_invalid_directive_usage_code(auth):
    graphql_schema = build_ast_schema(
        parse(AUTH_SCHEMA + "type Query { secret: String @auth }"),
        assume_valid_sdl=True,
    )
    schema = Schema(
        graphql_schema,
        {"Query": {"secret": lambda root, info: "123456"}},
        extensions=[SchemaDirectiveExtension(auth)],
    )
    endpoint = GraphQLEndpoint(schema)
    result = endpoint.dispatch({"query": "{secret}"})
    assert result["data"] == {"secret": None}
    [error] = result["errors"]
    assert error["path"] == ["secret"]
    assert error["extensions"] == {"code": "INVALID_DIRECTIVE_USAGE"}


def test_batching_not_supported(sync_schema):
    endpoint = GraphQLEndpoint(sync_schema)
    with pytest.raises(GraphQLError, match="Batching is not supported"):
        endpoint.dispatch([{"query": "{answer}"}])


def test_batch_endpoint(sync_schema):
    endpoint = GraphQLEndpoint(sync_schema, batching=True)

    assert endpoint.dispatch([]) == []

    result = endpoint.dispatch({"query": "{answer}"})
    assert result == {"data": {"answer": "42"}}

    batch_result = endpoint.dispatch(
        [
            {"query": "{answer}"},
            {"query": "{__typename}"},
        ]
    )
    assert batch_result == [
        {"data": {"answer": "42"}},
        {"data": {"__typename": "Query"}},
    ]


@pytest.mark.asyncio
async def test_async_endpoint(async_schema):
    endpoint = AsyncGraphQLEndpoint(async_schema)
    result = await endpoint.dispatch(
        {"query": "{answer}"}, context={"default_answer": "52"}
    )
    assert result == {"data": {"answer": "52"}}


@pytest.mark.asyncio
async def test_async_unauthorized_code(auth):
    async def secret(root, info):
        return "123456"

    schema = Schema(
        AUTH_TYPE_DEFS,
        {"Query": {"secretPassword": secret}},
        extensions=[SchemaDirectiveExtension(auth)],
    )
    endpoint = AsyncGraphQLEndpoint(schema)
    result = await endpoint.dispatch(
        {"query": "{secretPassword}"},
        context={"current_user": {"role": "USER"}},
    )
    assert result["data"] == {"secretPassword": None}
    assert result["errors"][0]["extensions"] == {"code": "UNAUTHORIZED"}


@pytest.mark.asyncio
async def test_async_batch_endpoint(async_schema):
    endpoint = AsyncGraphQLEndpoint(async_schema, batching=True)

    assert await endpoint.dispatch([]) == []

    batch_result = await endpoint.dispatch(
        [
            {"query": "{answer}"},
            {"query": "{__typename}"},
        ]
    )
    assert batch_result == [
        {"data": {"answer": "42"}},
        {"data": {"__typename": "Query"}},
    ]


@pytest.mark.asyncio
async def test_async_batching_not_supported(async_schema):
    endpoint = AsyncGraphQLEndpoint(async_schema)
    with pytest.raises(GraphQLError, match="Batching is not supported"):
        await endpoint.dispatch([{"query": "{answer}"}])
