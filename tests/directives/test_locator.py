from unittest.mock import Mock

import pytest

from graphql import (
    GraphQLField,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    build_schema,
    graphql_sync,
)

from gqlhooks.directives import (
    get_field_definition_node,
    get_field_directive,
    get_field_directives,
)


SCHEMA = build_schema(
    """
    directive @a(value: Int) on FIELD_DEFINITION
    directive @b on FIELD_DEFINITION

    type Query {
        plain: String
        single: String @a(value: 1)
        both: String @b @a(value: 2)
    }
    """
)


def located(schema, query, locate):
    found = {}

    def middleware(next_, root, info, **args):
        found[info.field_name] = locate(info)
        return next_(root, info, **args)

    result = graphql_sync(schema, query, middleware=[middleware])
    assert result.errors is None
    return found


def directive_names(directives):
    return [d.name.value for d in directives]


def test_field_directives():
    found = located(
        SCHEMA,
        "{ plain single both }",
        lambda info: directive_names(get_field_directives(info)),
    )
    assert found == {
        "plain": [],
        "single": ["a"],
        "both": ["b", "a"],
    }


def test_field_directive():
    found = located(
        SCHEMA,
        "{ plain single both }",
        lambda info: get_field_directive(info, "a"),
    )
    assert found["plain"] is None
    assert found["single"].arguments[0].value.value == "1"
    assert found["both"].arguments[0].value.value == "2"


def test_field_directive_first_wins():
    found = located(
        build_schema(
            """
            directive @a(value: Int) repeatable on FIELD_DEFINITION

            type Query {
                twice: String @a(value: 1) @a(value: 2)
            }
            """
        ),
        "{ twice }",
        lambda info: get_field_directive(info, "a"),
    )
    assert found["twice"].arguments[0].value.value == "1"


def test_introspection_fields():
    found = located(
        SCHEMA,
        "{ __typename plain }",
        lambda info: get_field_definition_node(info),
    )
    assert found["__typename"] is None
    assert found["plain"].name.value == "plain"


def test_field_without_declaration():
    schema = GraphQLSchema(
        query=GraphQLObjectType(
            "Query",
            {"value": GraphQLField(GraphQLString, resolve=lambda *_: "v")},
        )
    )
    found = located(
        schema, "{ value }", lambda info: get_field_directive(info, "a")
    )
    assert found == {"value": None}


def test_undefined_parent_type():
    info = Mock(
        schema=SCHEMA,
        parent_type=GraphQLObjectType("Unknown", {}),
        field_name="value",
    )
    assert get_field_directives(info) == []


def test_field_missing_from_schema():
    info = Mock(
        schema=SCHEMA,
        parent_type=SCHEMA.query_type,
        field_name="missing",
    )
    with pytest.raises(AssertionError, match="Field Query.missing"):
        get_field_definition_node(info)
