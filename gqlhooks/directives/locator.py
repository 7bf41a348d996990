from typing import List, Optional, cast

from graphql import GraphQLObjectType, GraphQLResolveInfo, is_object_type
from graphql.language import ast


def is_introspection_key(key: str) -> bool:
    """See: https://spec.graphql.org/June2018/#sec-Schema"""
    return key.startswith("__")


def get_field_definition_node(
    info: GraphQLResolveInfo,
) -> Optional[ast.FieldDefinitionNode]:
    """Returns declaration of the field being resolved

    Fields without declaration (introspection fields, fields added to
    the schema programmatically) have no declaration node.
    """
    if is_introspection_key(info.field_name):
        return None

    schema_type = info.schema.get_type(info.parent_type.name)
    if schema_type is None or not is_object_type(schema_type):
        return None

    field = cast(GraphQLObjectType, schema_type).fields.get(info.field_name)
    # schema and executed type are out of sync
    assert field is not None, "Field {}.{} is not defined".format(
        info.parent_type.name, info.field_name
    )
    if field is None:
        return None
    return field.ast_node


def get_field_directives(info: GraphQLResolveInfo) -> List[ast.DirectiveNode]:
    """Returns directives attached to the field being resolved,
    in the order they are written in the schema"""
    node = get_field_definition_node(info)
    if node is None or not node.directives:
        return []
    return list(node.directives)


def get_field_directive(
    info: GraphQLResolveInfo, name: str
) -> Optional[ast.DirectiveNode]:
    """Returns the first directive named ``name`` attached to the field
    being resolved, or None"""
    return next(
        (d for d in get_field_directives(info) if d.name.value == name),
        None,
    )
