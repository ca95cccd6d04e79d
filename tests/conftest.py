"""Pytest configuration and fakes for seq-rpc-client tests."""

import io
import threading

import pytest
from rich.console import Console

from seq_client.rpc import JSONRPCClient, WaitConfig

CHAIN_ID = "2ErDhAugYgUTYjnYJMrxh7yNbUNwEsxLf8Jos4Bp1u2XTyZs3B"
NETWORK_ID = 1337


class FakeRequester:
    """
    Request channel returning scripted replies.

    Replies are queued per method. The last queued reply repeats once the
    queue is down to one entry. A queued exception is raised; a queued
    callable is called with the request params and its return value used.

    """

    def __init__(self) -> None:
        self.replies: dict[str, list] = {}
        self.calls: list[tuple[str, dict | None, float | None]] = []
        self._lock = threading.Lock()

    def add(self, method: str, *replies) -> "FakeRequester":
        self.replies.setdefault(method, []).extend(replies)
        return self

    def send(self, method, params, timeout=None):
        with self._lock:
            self.calls.append((method, params, timeout))
            queue = self.replies.get(method)
            if not queue:
                raise AssertionError(f"unexpected request: {method}")
            reply = queue.pop(0) if len(queue) > 1 else queue[0]

        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(params)
        return reply

    def count(self, method: str) -> int:
        return sum(1 for call in self.calls if call[0] == method)

    def methods(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def requester():
    """Scripted request channel."""
    return FakeRequester()


@pytest.fixture
def client(requester):
    """Client on the fake channel that polls without delay and prints nothing."""
    return JSONRPCClient(
        "http://127.0.0.1:9650/ext/bc/seq",
        NETWORK_ID,
        CHAIN_ID,
        requester,
        wait_config=WaitConfig(interval=0),
        quiet=True,
    )


@pytest.fixture
def buffer_console():
    """Console writing plain text into a buffer (read it with ``.file.getvalue()``)."""
    return Console(file=io.StringIO(), width=200)
