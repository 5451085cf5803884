import io
import os
import sys
import textwrap
import time

import pytest

from prestoedit.highlight import LinkColor
from prestoedit.lsp import (
    LSPClient,
    LSPEvent,
    LSPHighlight,
    encode_message,
    read_message,
    to_uri,
)

SERVER = textwrap.dedent(
    """
    import json, sys
    body = json.dumps({"jsonrpc": "2.0", "method": "window/logMessage", "params": {"type": 3}}).encode()
    sys.stdout.buffer.write(b"Content-Length: " + str(len(body)).encode() + b"\\r\\n\\r\\n" + body)
    sys.stdout.buffer.flush()
    sys.stdin.buffer.read()
    """
)


def _messages(buffer):
    stream = io.BytesIO(buffer.getvalue())
    result = []
    while (message := read_message(stream)) is not None:
        result.append(message)
    return result


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


def test_encode_message_wire_format():
    assert encode_message({"a": 1}) == b'Content-Length: 7\r\n\r\n{"a":1}'


@pytest.mark.parametrize(
    "payload",
    [{"jsonrpc": "2.0", "id": 3, "method": "x"}, {"text": "héllo ünïcode"}, [1, 2, 3]],
)
def test_round_trip(payload):
    assert read_message(io.BytesIO(encode_message(payload))) == payload


def test_content_length_counts_bytes():
    data = encode_message({"t": "é"})
    header, body = data.split(b"\r\n\r\n", 1)
    assert int(header.split(b":")[1]) == len(body)


def test_read_message_empty_stream():
    assert read_message(io.BytesIO(b"")) is None


def test_read_message_without_length():
    with pytest.raises(ValueError):
        read_message(io.BytesIO(b"Content-Type: x\r\n\r\n{}"))


def test_read_message_malformed_header():
    with pytest.raises(ValueError):
        read_message(io.BytesIO(b"garbage\r\n\r\n{}"))


def test_read_message_truncated_body():
    with pytest.raises(EOFError):
        read_message(io.BytesIO(b"Content-Length: 10\r\n\r\n{}"))


def test_read_two_messages_in_sequence():
    stream = io.BytesIO(encode_message({"a": 1}) + encode_message({"b": 2}))
    assert read_message(stream) == {"a": 1}
    assert read_message(stream) == {"b": 2}
    assert read_message(stream) is None


def test_to_uri():
    uri = to_uri("main.nim")
    assert uri == "file://" + os.getcwd() + "/main.nim"
    assert uri.startswith("file://")


def test_requests_without_server_do_nothing():
    client = LSPClient()
    assert client.run_request("x", {}) is None
    assert client.last_request == 0
    client.run_notification("y", {})
    assert client.last_request == 0


def test_request_ids_increase():
    buffer = io.BytesIO()
    client = LSPClient(buffer)
    assert client.run_request("first", {}) == 0
    assert client.run_request("second", {"k": 1}) == 1
    messages = _messages(buffer)
    assert [m["id"] for m in messages] == [0, 1]
    assert messages[1]["method"] == "second"
    assert messages[1]["params"] == {"k": 1}
    assert all(m["jsonrpc"] == "2.0" for m in messages)


def test_notification_has_no_id():
    buffer = io.BytesIO()
    client = LSPClient(buffer)
    client.run_notification("initialized", {})
    (message,) = _messages(buffer)
    assert "id" not in message
    assert message["method"] == "initialized"


def test_open_file_messages():
    buffer = io.BytesIO()
    client = LSPClient(buffer)
    client.open_file("a.nim", "echo 1")
    opened, tokens = _messages(buffer)
    assert opened["method"] == "textDocument/didOpen"
    document = opened["params"]["textDocument"]
    assert document["languageId"] == "nim"
    assert document["version"] == 0
    assert document["uri"] == to_uri("a.nim")
    assert document["text"] == "echo 1"
    assert tokens["method"] == "textDocument/semanticTokens/full"
    assert tokens["params"] == {"textDocument": {"uri": to_uri("a.nim")}}
    assert tokens["id"] == 0


def test_save_file_messages():
    buffer = io.BytesIO()
    client = LSPClient(buffer)
    client.save_file("a.nim", "new\n")
    changed, tokens = _messages(buffer)
    assert changed["method"] == "textDocument/didChange"
    assert changed["params"]["textDocument"]["version"] == 1
    assert changed["params"]["contentChanges"] == [{"text": "new\n"}]
    assert tokens["method"] == "textDocument/semanticTokens/full"


def test_close_file_message():
    buffer = io.BytesIO()
    client = LSPClient(buffer)
    client.close_file("a.nim")
    (closed,) = _messages(buffer)
    assert closed["method"] == "textDocument/didClose"
    assert closed["params"] == {"textDocument": {"uri": to_uri("a.nim")}}


def test_get_highlight_is_empty():
    assert LSPClient().get_highlight("a.nim") == []


def test_highlight_fields():
    span = LSPHighlight(2, 4, LinkColor("function"))
    assert (span.pos, span.length, span.color) == (2, 4, LinkColor("function"))


def test_update_without_thread_keeps_queue():
    client = LSPClient()
    client.queue.append(LSPEvent("x", None))
    client.update()
    assert list(client.queue) == [LSPEvent("x", None)]


def test_spawn_missing_program():
    with LSPClient() as client:
        with pytest.raises(OSError):
            client.spawn("prestoedit-no-such-server-program")


def test_spawned_server_events_are_queued_and_drained():
    with LSPClient() as client:
        client.spawn([sys.executable, "-c", SERVER])
        assert client.last_request == 1
        assert _wait_for(lambda: len(client.queue) == 1)
        assert client.queue[0] == LSPEvent("window/logMessage", {"type": 3})
        assert client.thread_running
        client.update()
        assert len(client.queue) == 0
    assert not client.thread_running