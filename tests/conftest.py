import pytest

from gqlhooks.directives import SchemaDirectiveHook

from tests.base import AUTH_SCHEMA, check_role, to_upper


@pytest.fixture(name="auth")
def auth_fixture():
    return SchemaDirectiveHook(schema=AUTH_SCHEMA, validation=check_role)


@pytest.fixture(name="uppercase")
def uppercase_fixture():
    return SchemaDirectiveHook(
        schema="directive @uppercase on FIELD_DEFINITION",
        transformation=to_upper,
    )


@pytest.fixture(name="resolvers")
def resolvers_fixture():
    return {
        "Query": {
            "simple": lambda root, info: "Hi",
            "secretPassword": lambda root, info: "123456",
            "testUpper": lambda root, info: "dotan",
            "testNumber": lambda root, info: 42,
            "me": lambda root, info: info.context["current_user"],
        },
    }
