"""Command line interface entry point."""

import logging
from typing import Sequence, Tuple

import click
from graphql import GraphQLError
from graphql.language import ast

from gqlhooks.readers.graphql import parse_schema
from gqlhooks.validate.directives import format_violation, validate_directives

log = logging.getLogger(__name__)

DEFAULT_TYPES = ("Query", "Mutation")


def read_schema_files(paths: Sequence[str]) -> ast.DocumentNode:
    sources = []
    for path in paths:
        with open(path, encoding="utf-8") as f:
            sources.append(f.read())
    return parse_schema("\n".join(sources))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="gqlhooks")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """GraphQL schema directives utility."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command(name="check-directives")
@click.argument(
    "schema_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "-r",
    "--require",
    "required",
    multiple=True,
    required=True,
    help="Directive name, one of which every field must have",
)
@click.option(
    "-t",
    "--type",
    "types",
    multiple=True,
    default=DEFAULT_TYPES,
    show_default=True,
    help="Object type name to check",
)
def check_directives(
    schema_files: Tuple[str, ...],
    required: Tuple[str, ...],
    types: Tuple[str, ...],
) -> None:
    """Check that every field of selected types has a required directive.

    Exits with non-zero status when some fields have none.
    """
    try:
        document = read_schema_files(schema_files)
    except GraphQLError as exc:
        raise click.ClickException(
            "Failed to parse schema: {}".format(exc.message)
        ) from exc

    log.debug(
        "Checking types %s for directives %s",
        ", ".join(types),
        ", ".join("@{}".format(name) for name in required),
    )
    violations = validate_directives(document, required, types)
    for name in violations:
        click.echo(format_violation(name), err=True)

    if violations:
        raise SystemExit(1)


def main() -> None:
    cli()
