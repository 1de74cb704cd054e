"""Tests for docker exec transport invocations."""

import shlex

import pytest

from dockrsync.core.transport import TransportBuilder


def test_non_interactive_invocation():
    transport = TransportBuilder().build("abc123", interactive=False)
    assert transport.argv("ls", "-la") == ["docker", "exec", "-i", "abc123", "ls", "-la"]
    assert transport.rsh() == "docker exec -i"
    assert transport.remote("/app/") == "abc123:/app/"


def test_interactive_invocation_allocates_tty():
    transport = TransportBuilder().build("abc123", interactive=True)
    assert transport.argv("bash") == ["docker", "exec", "-it", "abc123", "bash"]


def test_container_id_is_one_argument():
    transport = TransportBuilder().build("id; rm -rf /")
    argv = transport.argv("true")
    assert argv[3] == "id; rm -rf /"
    assert shlex.split(shlex.join(argv)) == argv


def test_blank_container_id_rejected():
    with pytest.raises(ValueError):
        TransportBuilder().build("   ")


def test_custom_program():
    transport = TransportBuilder(program="podman").build("abc123")
    assert transport.rsh() == "podman exec -i"
