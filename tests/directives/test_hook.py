import dataclasses

import pytest

from gqlhooks.directives import SchemaDirectiveHook

from tests.base import AUTH_SCHEMA, check_role, to_upper


def test_hook_name():
    hook = SchemaDirectiveHook(schema=AUTH_SCHEMA, validation=check_role)
    assert hook.name == "auth"
    assert hook.validation is check_role
    assert hook.transformation is None


def test_hook_is_frozen():
    hook = SchemaDirectiveHook(schema="directive @a on FIELD_DEFINITION")
    with pytest.raises(dataclasses.FrozenInstanceError):
        hook.name = "b"


def test_hook_several_locations():
    hook = SchemaDirectiveHook(
        schema="directive @a on OBJECT | FIELD_DEFINITION",
    )
    assert hook.name == "a"


def test_hook_without_field_definition_location():
    with pytest.raises(ValueError) as err:
        SchemaDirectiveHook(schema="directive @a on OBJECT | FIELD")
    assert err.match("Directive @a must be allowed on FIELD_DEFINITION")
    assert err.match("got: FIELD, OBJECT")


def test_hook_without_directive():
    with pytest.raises(ValueError, match="No directive definitions"):
        SchemaDirectiveHook(schema="enum Role { USER }")


def test_hook_with_several_directives():
    with pytest.raises(ValueError) as err:
        SchemaDirectiveHook(
            schema="""
            directive @a on FIELD_DEFINITION
            directive @b on FIELD_DEFINITION
            """
        )
    assert err.match("exactly one directive definition, 2 found: @a, @b")


def test_hook_on_field_definition():
    hook = SchemaDirectiveHook(
        schema="directive @uppercase on FIELD_DEFINITION",
        transformation=to_upper,
    )
    assert hook.name == "uppercase"
    assert hook.transformation is to_upper
