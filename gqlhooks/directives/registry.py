from typing import Dict, Iterator, Mapping, Optional

from graphql import GraphQLDirective, GraphQLSchema


class DirectiveRegistry(Mapping[str, GraphQLDirective]):
    """Directive definitions of a schema, by name.

    Populated once when the schema is built and never changed after.
    """

    def __init__(self, directives: Mapping[str, GraphQLDirective]) -> None:
        self._directives: Dict[str, GraphQLDirective] = dict(directives)

    @classmethod
    def from_schema(cls, schema: GraphQLSchema) -> "DirectiveRegistry":
        return cls({d.name: d for d in schema.directives})

    def __getitem__(self, name: str) -> GraphQLDirective:
        return self._directives[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._directives)

    def __len__(self) -> int:
        return len(self._directives)

    def lookup(self, name: str) -> Optional[GraphQLDirective]:
        """Returns directive definition or None when it is not defined"""
        return self._directives.get(name)

    def __repr__(self) -> str:
        return "<{} {}>".format(
            type(self).__name__,
            " ".join("@{}".format(name) for name in self._directives),
        )
