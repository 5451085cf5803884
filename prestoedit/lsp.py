"""A minimal Language Server Protocol client speaking JSON-RPC over pipes."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import subprocess
import threading
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from typing import IO, Any

from prestoedit.highlight import Color

logger = logging.getLogger("lsp")


@dataclass(frozen=True)
class LSPEvent:
    """A notification received from the language server."""

    name: str
    data: Any


@dataclass(frozen=True)
class LSPHighlight:
    """A coloured span of ``length`` characters starting at ``pos``."""

    pos: int
    length: int
    color: Color


def to_uri(path: str) -> str:
    """Return a ``file://`` URI for ``path`` relative to the working directory."""
    return "file://" + os.getcwd() + "/" + path


def encode_message(payload: Any) -> bytes:
    """Frame ``payload`` as a JSON-RPC message with a Content-Length header."""
    content = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return b"Content-Length: %d\r\n\r\n" % len(content) + content


def read_message(stream: IO[bytes]) -> Any | None:
    """Read one framed message from ``stream``.

    Returns None at a clean end of stream. Raises ValueError for a malformed
    header and EOFError when the stream ends inside a message.
    """
    length: int | None = None
    started = False
    while True:
        raw = stream.readline()
        if not raw:
            if not started:
                return None
            raise EOFError("stream ended inside a message header")
        started = True
        line = raw.rstrip(b"\r\n")
        if not line:
            if length is None:
                raise ValueError("message without Content-Length header")
            break
        name, sep, value = line.partition(b":")
        if not sep:
            raise ValueError(f"malformed header line: {line!r}")
        if name.strip().lower() == b"content-length":
            try:
                length = int(value.strip())
            except ValueError as exc:
                raise ValueError(f"bad Content-Length: {value!r}") from exc
    body = stream.read(length)
    if len(body) < length:
        raise EOFError("stream ended inside a message body")
    return json.loads(body)


class LSPClient:
    """A connection to a language server process."""

    def __init__(self, writer: IO[bytes] | None = None) -> None:
        self._writer = writer
        self._process: subprocess.Popen[bytes] | None = None
        self._reader: threading.Thread | None = None
        self._lock = threading.Lock()
        self._highlights: dict[str, list[list[LSPHighlight]]] = {}
        self.last_request = 0
        self.queue: deque[LSPEvent] = deque()

    @property
    def thread_running(self) -> bool:
        """Whether the background reader is still receiving messages."""
        return self._reader is not None and self._reader.is_alive()

    def __enter__(self) -> LSPClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._terminate()

    def _terminate(self) -> None:
        process = self._process
        if process is None:
            return
        with self._lock:
            self._writer = None
        if process.stdin is not None:
            with contextlib.suppress(OSError):
                process.stdin.close()
        try:
            process.wait(timeout=2)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
        if self._reader is not None:
            self._reader.join(timeout=2)
        if process.stdout is not None:
            with contextlib.suppress(OSError):
                process.stdout.close()
        self._process = None

    def spawn(self, cmd: str | Sequence[str]) -> None:
        """Start a language server and perform the initialize handshake."""
        self._terminate()
        args = [cmd] if isinstance(cmd, str) else list(cmd)
        process = subprocess.Popen(args, stdin=subprocess.PIPE, stdout=subprocess.PIPE)
        self._process = process
        with self._lock:
            self._writer = process.stdin
        logger.info("launched lsp server")
        self._reader = threading.Thread(target=self._listen, args=(process.stdout,), daemon=True)
        self._reader.start()
        self.run_request("initialize", {"capabilities": {}})
        self.run_notification("initialized", {})

    def _listen(self, stream: IO[bytes]) -> None:
        logger.info("Started background thread")
        try:
            while (message := read_message(stream)) is not None:
                self._dispatch(message)
        except (OSError, ValueError, EOFError) as exc:
            logger.error("lsp connection failed: %s", exc)
        finally:
            logger.info("Ended background thread")

    def _dispatch(self, message: Any) -> None:
        if not isinstance(message, dict):
            logger.warning("malformed message %s", message)
            return
        method = message.get("method")
        request_id = message.get("id")
        if isinstance(method, str):
            with self._lock:
                self.queue.appendleft(LSPEvent(method, message.get("params")))
        elif isinstance(request_id, (int, float)) and not isinstance(request_id, bool):
            logger.warning("implement callback for request %s", request_id)
        else:
            logger.warning("malformed message %s", json.dumps(message))

    def update(self) -> None:
        """Handle and discard the queued server notifications."""
        if not self.thread_running:
            return
        with self._lock:
            events = list(self.queue)
            self.queue.clear()
        for event in events:
            logger.warning("unhandled lsp event %s", event.name)

    def _send(self, payload: dict[str, Any]) -> bool:
        with self._lock:
            if self._writer is None:
                return False
            self._writer.write(encode_message(payload))
            self._writer.flush()
        return True

    def run_notification(self, method: str, params: Any) -> None:
        """Send a notification; does nothing when no server is connected."""
        if self._send({"jsonrpc": "2.0", "method": method, "params": params}):
            logger.info("notification: %s", method)

    def run_request(self, method: str, params: Any) -> int | None:
        """Send a request and return its id, or None when no server is connected."""
        with self._lock:
            if self._writer is None:
                return None
            request_id = self.last_request
            self.last_request += 1
            payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
            self._writer.write(encode_message(payload))
            self._writer.flush()
        logger.info("lsp request: %s, id: %s", method, request_id)
        return request_id

    def open_file(self, path: str, content: str) -> None:
        """Announce an opened document and ask for its semantic tokens."""
        self.run_notification(
            "textDocument/didOpen",
            {
                "textDocument": {
                    "languageId": "nim",
                    "version": 0,
                    "uri": to_uri(path),
                    "text": content,
                }
            },
        )
        self.run_request("textDocument/semanticTokens/full", {"textDocument": {"uri": to_uri(path)}})

    def save_file(self, path: str, content: str) -> None:
        """Send the whole new content of a document and ask for its tokens."""
        self.run_notification(
            "textDocument/didChange",
            {
                "textDocument": {"version": 1, "uri": to_uri(path)},
                "contentChanges": [{"text": content}],
            },
        )
        self.run_request("textDocument/semanticTokens/full", {"textDocument": {"uri": to_uri(path)}})

    def close_file(self, path: str) -> None:
        """Announce that a document was closed and forget its highlights."""
        with self._lock:
            self._highlights.pop(to_uri(path), None)
        self.run_notification("textDocument/didClose", {"textDocument": {"uri": to_uri(path)}})

    def get_highlight(self, path: str) -> list[list[LSPHighlight]]:
        """Return the per-line highlight spans known for ``path``."""
        with self._lock:
            known = self._highlights.get(to_uri(path), [])
            return [list(spans) for spans in known]