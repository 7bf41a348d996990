import asyncio
import logging

from gqlhooks.directives import SchemaDirectiveHook
from gqlhooks.error import Unauthorized
from gqlhooks.extensions import SchemaDirectiveExtension
from gqlhooks.schema import Schema


log = logging.getLogger(__name__)


def check_role(execution_context, directive_args, payload):
    user = payload.context.get("current_user")
    if user is None:
        raise Unauthorized("Oops, go away!")
    if user["role"] != directive_args["role"]:
        raise Unauthorized(
            "You don't have the required role '{}' for this field!".format(
                directive_args["role"]
            )
        )


def to_upper(execution_context, directive_args, payload, result):
    if isinstance(result, str):
        return result.upper()
    return result


auth = SchemaDirectiveHook(
    schema="""
    enum Role {
        USER
        ADMIN
    }

    directive @auth(role: Role!) on FIELD_DEFINITION
    """,
    validation=check_role,
)

uppercase = SchemaDirectiveHook(
    schema="directive @uppercase on FIELD_DEFINITION",
    transformation=to_upper,
)

TYPE_DEFS = """
type Query {
    me: User! @auth(role: USER)
    simple: String
    secretPassword: String @auth(role: ADMIN)
    testUpper: String @uppercase
}

type User {
    id: ID!
    name: String!
}
"""

RESOLVERS = {
    "Query": {
        "simple": lambda root, info: "Hi",
        "secretPassword": lambda root, info: "123456",
        "testUpper": lambda root, info: "dotan",
        "me": lambda root, info: info.context["current_user"],
    },
}

schema = Schema(
    TYPE_DEFS,
    RESOLVERS,
    extensions=[
        SchemaDirectiveExtension(auth),
        SchemaDirectiveExtension(uppercase),
    ],
)


async def main():
    logging.basicConfig()
    log.setLevel(logging.INFO)

    user = {"id": "1", "name": "Dotan", "role": "USER"}
    result = await schema.execute(
        "{ me { id } }", context={"current_user": user}
    )
    log.info("Authenticated user: %s", result)

    result = await schema.execute("{ me { id } }", context={})
    log.info("Anonymous user: %s", result)

    result = await schema.execute("{ testUpper }", context={})
    log.info("Upper case transformation: %s", result)


if __name__ == "__main__":
    asyncio.run(main())
