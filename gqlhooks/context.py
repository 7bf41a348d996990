from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from graphql import ExecutionResult, GraphQLError, GraphQLSchema
from graphql.language import ast

from gqlhooks.directives.hook import SchemaDirectiveHook
from gqlhooks.directives.registry import DirectiveRegistry


@dataclass
class ExecutionContext:
    query_src: str
    variables: Optional[Dict[str, Any]]
    context: Any
    graphql_document: Optional[ast.DocumentNode] = None
    schema: Optional[GraphQLSchema] = None
    directives: Optional[DirectiveRegistry] = None
    root_value: Any = None
    """Operation name from request's json operationName"""
    operation_name: Optional[str] = None
    result: Optional[ExecutionResult] = None
    """If errors is list, validation was performed"""
    errors: Optional[List[GraphQLError]] = None

    """Schema definition fragments to build the schema with, on_init only"""
    type_defs: Tuple[str, ...] = field(default_factory=lambda: tuple())
    directive_hooks: Tuple[SchemaDirectiveHook, ...] = field(
        default_factory=lambda: tuple()
    )
    """Resolver middleware for the operation, filled in on_execute"""
    middleware: Tuple[Any, ...] = field(default_factory=lambda: tuple())

    @property
    def variable_values(self) -> Dict[str, Any]:
        return self.variables or {}


def create_execution_context(
    query: Optional[str] = None,
    variables: Optional[Dict] = None,
    operation_name: Optional[str] = None,
    context: Any = None,
    **kwargs: Any,
) -> ExecutionContext:
    return ExecutionContext(
        query_src=query or "",
        variables=variables,
        operation_name=operation_name,
        context={} if context is None else context,
        **kwargs,
    )
