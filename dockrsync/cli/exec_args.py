"""Argument grammar of `dockrsync exec [service] -- command...`."""

from typing import NamedTuple, Optional

from dockrsync.errors import MalformedExecArgs

SEPARATOR = "--"


class ExecRequest(NamedTuple):
    service: Optional[str]
    command: list[str]


def parse_exec_args(tokens: list[str]) -> ExecRequest:
    """Split exec arguments into an optional service and the command.

    The ``--`` separator must be the first or second token and must be
    followed by at least one command token.
    """
    try:
        separator = tokens.index(SEPARATOR)
    except ValueError:
        raise MalformedExecArgs(tokens)
    if separator > 1:
        raise MalformedExecArgs(tokens)
    command = tokens[separator + 1:]
    if not command:
        raise MalformedExecArgs(tokens)
    service = tokens[0] if separator == 1 else None
    return ExecRequest(service, command)
