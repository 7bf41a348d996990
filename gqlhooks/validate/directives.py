"""
gqlhooks.validate.directives
~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Static check that fields of selected object types are annotated with at
least one of the required directives, e.g. that every ``Query`` and
``Mutation`` field declares its access policy with ``@auth`` or
``@noAuth``. Runs over the schema definition document, before the schema
is built or executed.

"""

import typing as t

from graphql.language import ast

from ..readers.graphql import NodeVisitor, parse_schema
from .errors import Errors


def format_violation(name: str) -> str:
    return 'GraphQL field "{}" doesn\'t have the required directives'.format(
        name
    )


class DirectivePresenceError(TypeError):
    def __init__(self, errors: t.List[str]) -> None:
        self.errors = errors
        errors_list = "\n".join(
            "- {}".format(format_violation(e)) for e in errors
        )
        super(DirectivePresenceError, self).__init__("\n" + errors_list)


class DirectivePresenceValidator(NodeVisitor):
    def __init__(
        self,
        required: t.Iterable[str],
        types: t.Iterable[str],
    ) -> None:
        self.required = frozenset(required)
        self.types = frozenset(types)
        self.errors = Errors()

    @classmethod
    def validate(
        cls,
        document: ast.DocumentNode,
        required: t.Iterable[str],
        types: t.Iterable[str],
    ) -> t.List[str]:
        validator = cls(required, types)
        validator.visit(document)
        return validator.errors.list

    def has_required_directive(self, obj: ast.FieldDefinitionNode) -> bool:
        return any(d.name.value in self.required for d in obj.directives or ())

    def visit_fields(
        self,
        obj: t.Union[
            ast.ObjectTypeDefinitionNode, ast.ObjectTypeExtensionNode
        ],
    ) -> None:
        if obj.name.value not in self.types:
            return
        for field in obj.fields or ():
            if not self.has_required_directive(field):
                self.errors.report(
                    "{}.{}".format(obj.name.value, field.name.value)
                )

    def visit_object_type_definition(
        self, obj: ast.ObjectTypeDefinitionNode
    ) -> None:
        self.visit_fields(obj)

    def visit_object_type_extension(
        self, obj: ast.ObjectTypeExtensionNode
    ) -> None:
        self.visit_fields(obj)


def validate_directives(
    document: t.Union[str, ast.DocumentNode],
    required: t.Iterable[str],
    types: t.Iterable[str],
) -> t.List[str]:
    """Returns ``"Type.field"`` names of fields which have none of the
    required directives

    Only object types named in ``types`` are checked, fields are reported
    in the order they are defined. Document is not modified.

    :param document: schema definition document or its source
    :param required: names of directives, one of which each field must have
    :param types: names of object types to check
    :return: list of violations, empty when schema is valid
    """
    return DirectivePresenceValidator.validate(
        parse_schema(document), required, types
    )


def check_directives(
    document: t.Union[str, ast.DocumentNode],
    required: t.Iterable[str],
    types: t.Iterable[str],
) -> None:
    """Same as :py:func:`validate_directives`, but raises
    :py:class:`DirectivePresenceError` when there are violations"""
    errors = validate_directives(document, required, types)
    if errors:
        raise DirectivePresenceError(errors)
