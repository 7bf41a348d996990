from typing import Any, Dict, Optional

from graphql import GraphQLDirective, GraphQLError
from graphql.execution.values import get_argument_values
from graphql.language import ast

from gqlhooks.error import InvalidDirectiveUsage


def decode_directive_args(
    definition: GraphQLDirective,
    node: ast.DirectiveNode,
    variables: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Decodes arguments of a directive annotation

    Values are coerced to the argument types declared by the directive
    definition, omitted arguments get their declared defaults.

    :param definition: directive definition from the schema
    :param node: directive annotation
    :param variables: coerced variables of the operation
    :return: mapping of argument name to value, empty if the directive
        has no arguments
    :raises InvalidDirectiveUsage: when required argument is missing or
        value can not be coerced
    """
    try:
        return get_argument_values(definition, node, variables)
    except GraphQLError as e:
        raise InvalidDirectiveUsage(
            "Invalid usage of directive @{}: {}".format(
                definition.name, e.message
            )
        ) from e
