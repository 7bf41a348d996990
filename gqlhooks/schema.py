from dataclasses import dataclass
from inspect import isawaitable
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    Union,
)

from graphql import (
    GraphQLError,
    GraphQLSchema,
    build_ast_schema,
    concat_ast,
    execute,
    execute_sync,
    is_object_type,
    validate,
)
from graphql.language import ast

from gqlhooks.context import ExecutionContext, create_execution_context
from gqlhooks.directives import DirectiveRegistry
from gqlhooks.extensions.base_extension import Extension, ExtensionsManager
from gqlhooks.readers.graphql import parse_query, parse_schema

TypeDefs = Union[str, ast.DocumentNode, GraphQLSchema]
Resolvers = Mapping[str, Mapping[str, Callable[..., Any]]]


class ValidationError(Exception):
    def __init__(self, errors: List[GraphQLError]) -> None:
        super().__init__("{} errors".format(len(errors)))
        self.errors = errors


def _definition_name(definition: ast.DefinitionNode) -> Optional[str]:
    name = getattr(definition, "name", None)
    if name is None or isinstance(definition, ast.TypeExtensionNode):
        return None
    return name.value


def merge_type_defs(
    type_defs: Union[str, ast.DocumentNode],
    fragments: Iterable[str],
) -> ast.DocumentNode:
    """Prepends fragments to the schema definition document

    Fragment definitions which are already defined in ``type_defs`` are
    skipped, so directive definitions may be written in both places.
    """
    document = parse_schema(type_defs)
    defined = {_definition_name(d) for d in document.definitions}

    documents = []
    for fragment in fragments:
        fragment_doc = parse_schema(fragment)
        definitions = []
        for definition in fragment_doc.definitions:
            name = _definition_name(definition)
            if name is not None and name in defined:
                continue
            defined.add(name)
            definitions.append(definition)
        documents.append(ast.DocumentNode(definitions=tuple(definitions)))

    documents.append(document)
    return concat_ast(documents)


def bind_resolvers(schema: GraphQLSchema, resolvers: Resolvers) -> None:
    """Sets field resolvers, ``resolvers`` map type name to a mapping
    of field name to resolver function"""
    for type_name, fields in resolvers.items():
        type_ = schema.get_type(type_name)
        if type_ is None or not is_object_type(type_):
            raise ValueError(
                'Can not bind resolvers to "{}": not an object type'.format(
                    type_name
                )
            )
        for field_name, resolver in fields.items():
            field = type_.fields.get(field_name)  # type: ignore[union-attr]
            if field is None:
                raise ValueError(
                    'Field "{}" is not defined in "{}" type'.format(
                        field_name, type_name
                    )
                )
            field.resolve = resolver


def build_schema(
    type_defs: TypeDefs,
    resolvers: Optional[Resolvers] = None,
    fragments: Sequence[str] = (),
) -> GraphQLSchema:
    if isinstance(type_defs, GraphQLSchema):
        schema = type_defs
    else:
        schema = build_ast_schema(merge_type_defs(type_defs, fragments))
    if resolvers:
        bind_resolvers(schema, resolvers)
    return schema


@dataclass
class ExecutionResult:
    data: Optional[Dict[str, Any]]
    errors: Optional[List[GraphQLError]]


class Schema:
    """Executable schema with extensions

    :param type_defs: schema definition language source, parsed document
        or already built :py:class:`graphql.GraphQLSchema`
    :param resolvers: mapping of type name to a mapping of field name to
        resolver ``(root, info, **args)``
    :param extensions: list of extensions or extension classes
    :param root_value: root value for top-level resolvers
    """

    graphql_schema: GraphQLSchema
    directives: DirectiveRegistry

    def __init__(
        self,
        type_defs: TypeDefs,
        resolvers: Optional[Resolvers] = None,
        extensions: Optional[
            Sequence[Union[Extension, Type[Extension]]]
        ] = None,
        root_value: Any = None,
    ):
        self.root_value = root_value
        self.extensions = list(extensions or [])

        execution_context = create_execution_context()
        extensions_manager = ExtensionsManager(
            execution_context=execution_context,
            extensions=self.extensions,
        )
        with extensions_manager.init():
            names = [hook.name for hook in execution_context.directive_hooks]
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ValueError(
                    "Directives with more than one hook: {}".format(
                        ", ".join("@{}".format(n) for n in duplicates)
                    )
                )

            self.graphql_schema = build_schema(
                type_defs, resolvers, execution_context.type_defs
            )
            self.directives = DirectiveRegistry.from_schema(self.graphql_schema)
            execution_context.schema = self.graphql_schema
            execution_context.directives = self.directives

    def _create_execution_context(
        self,
        query: Union[str, ast.DocumentNode],
        variables: Optional[Dict[str, Any]],
        operation_name: Optional[str],
        context: Any,
    ) -> ExecutionContext:
        document = None
        if isinstance(query, ast.DocumentNode):
            document, query = query, ""
        return create_execution_context(
            query=query,
            variables=variables,
            operation_name=operation_name,
            context=context,
            graphql_document=document,
            schema=self.graphql_schema,
            directives=self.directives,
            root_value=self.root_value,
        )

    def _init_execution_context(
        self,
        execution_context: ExecutionContext,
        extensions_manager: ExtensionsManager,
    ) -> None:
        with extensions_manager.parsing():
            if execution_context.graphql_document is None:
                assert execution_context.query_src, "query string not provided"
                execution_context.graphql_document = parse_query(
                    execution_context.query_src
                )

        with extensions_manager.validation():
            if execution_context.errors is None:
                execution_context.errors = validate(
                    self.graphql_schema, execution_context.graphql_document
                )

            if execution_context.errors:
                raise ValidationError(errors=execution_context.errors)

    def _execute_args(self, execution_context: ExecutionContext) -> Dict:
        assert execution_context.graphql_document is not None
        return dict(
            schema=self.graphql_schema,
            document=execution_context.graphql_document,
            root_value=execution_context.root_value,
            context_value=execution_context.context,
            variable_values=execution_context.variables,
            operation_name=execution_context.operation_name,
            middleware=list(execution_context.middleware) or None,
        )

    def execute_sync(
        self,
        query: Union[str, ast.DocumentNode],
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        context: Any = None,
    ) -> ExecutionResult:
        execution_context = self._create_execution_context(
            query, variables, operation_name, context
        )
        extensions_manager = ExtensionsManager(
            execution_context=execution_context,
            extensions=self.extensions,
        )

        try:
            with extensions_manager.operation():
                self._init_execution_context(
                    execution_context, extensions_manager
                )

                with extensions_manager.execution():
                    # async resolvers and validations are not awaited here
                    result = execute_sync(
                        **self._execute_args(execution_context),
                        check_sync=True,
                    )
                    execution_context.result = result

            return ExecutionResult(result.data, result.errors)
        except ValidationError as e:
            return ExecutionResult(None, e.errors)
        except GraphQLError as e:
            return ExecutionResult(None, [e])

    async def execute(
        self,
        query: Union[str, ast.DocumentNode],
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        context: Any = None,
    ) -> ExecutionResult:
        execution_context = self._create_execution_context(
            query, variables, operation_name, context
        )
        extensions_manager = ExtensionsManager(
            execution_context=execution_context,
            extensions=self.extensions,
        )

        try:
            with extensions_manager.operation():
                self._init_execution_context(
                    execution_context, extensions_manager
                )

                with extensions_manager.execution():
                    result = execute(**self._execute_args(execution_context))
                    if isawaitable(result):
                        result = await result
                    execution_context.result = result

            return ExecutionResult(result.data, result.errors)
        except ValidationError as e:
            return ExecutionResult(None, e.errors)
        except GraphQLError as e:
            return ExecutionResult(None, [e])
