"""Tests for the exec argument grammar."""

import pytest

from dockrsync.cli.exec_args import parse_exec_args
from dockrsync.errors import MalformedExecArgs


@pytest.mark.parametrize("tokens,service,command", [
    (["--", "ls"], None, ["ls"]),
    (["svcA", "--", "ls"], "svcA", ["ls"]),
    (["svcA", "--", "ls", "-la", "--", "x"], "svcA", ["ls", "-la", "--", "x"]),
    (["--", "sh", "-c", "echo hi"], None, ["sh", "-c", "echo hi"]),
])
def test_valid_exec_args(tokens, service, command):
    request = parse_exec_args(tokens)
    assert request.service == service
    assert request.command == command


@pytest.mark.parametrize("tokens", [
    [],
    ["ls"],
    ["svcA", "ls"],
    ["svcA", "svcB", "--", "ls"],
    ["--"],
    ["svcA", "--"],
])
def test_malformed_exec_args(tokens):
    with pytest.raises(MalformedExecArgs):
        parse_exec_args(tokens)
