"""
gqlhooks.readers.graphql
~~~~~~~~~~~~~~~~~~~~~~~~

Parsing of GraphQL queries and schema definition fragments.

"""

from typing import Any, List, Union

from graphql.language import ast
from graphql.language.parser import parse


def parse_query(src: str) -> ast.DocumentNode:
    """Parses a query into GraphQL ast

    :param str src: GraphQL query string
    :return: :py:class:`ast.DocumentNode`
    """
    return parse(src)


def parse_schema(
    src: Union[str, ast.DocumentNode],
) -> ast.DocumentNode:
    """Parses schema definition language source into GraphQL ast

    Already parsed documents are returned as is.
    """
    if isinstance(src, ast.DocumentNode):
        return src
    return parse(src)


class NodeVisitor:
    def visit(self, obj: ast.Node) -> Any:
        visit_method = getattr(self, "visit_{}".format(obj.kind), None)
        if visit_method is None:
            return self.generic_visit(obj)
        return visit_method(obj)

    def generic_visit(self, obj: ast.Node) -> Any:
        pass

    def visit_document(self, obj: ast.DocumentNode) -> None:
        for definition in obj.definitions:
            self.visit(definition)


class DirectiveDefinitionGetter(NodeVisitor):
    def __init__(self) -> None:
        self._definitions: List[ast.DirectiveDefinitionNode] = []

    @classmethod
    def get(cls, doc: ast.DocumentNode) -> ast.DirectiveDefinitionNode:
        self = cls()
        self.visit(doc)
        if not self._definitions:
            raise ValueError("No directive definitions in the document")
        if len(self._definitions) > 1:
            raise ValueError(
                "Document should contain exactly one directive definition, "
                "{} found: {}".format(
                    len(self._definitions),
                    ", ".join(
                        "@{}".format(d.name.value) for d in self._definitions
                    ),
                )
            )
        return self._definitions[0]

    def visit_directive_definition(
        self, obj: ast.DirectiveDefinitionNode
    ) -> None:
        self._definitions.append(obj)


def read_directive_definition(
    src: Union[str, ast.DocumentNode],
) -> ast.DirectiveDefinitionNode:
    """Reads the only directive definition from a schema fragment

    :param src: schema definition language fragment
    :return: :py:class:`ast.DirectiveDefinitionNode`
    :raises ValueError: when fragment defines none or several directives
    """
    return DirectiveDefinitionGetter.get(parse_schema(src))
