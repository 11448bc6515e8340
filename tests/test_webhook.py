from __future__ import annotations

import io

from deflate.webhook import callback_from_environ, callback_response


def test_decodes_bytes_verbatim() -> None:
    assert callback_response(b'{"status":"done"}') == {"status": "done"}


def test_decodes_str_without_validation() -> None:
    body = '{"status": "done", "images": [{"id": 3, "saved": 0.41}], "custom": {"order": "abc"}}'
    assert callback_response(body) == {
        "status": "done",
        "images": [{"id": 3, "saved": 0.41}],
        "custom": {"order": "abc"},
    }


def test_invalid_body_returns_none() -> None:
    assert callback_response(b"not json") is None
    assert callback_response(b"") is None
    assert callback_response(b"\xff\xfe") is None


def test_reads_wsgi_environ() -> None:
    raw = b'{"status":"done"}'
    environ = {"CONTENT_LENGTH": str(len(raw)), "wsgi.input": io.BytesIO(raw)}
    assert callback_from_environ(environ) == {"status": "done"}


def test_wsgi_environ_without_body() -> None:
    assert callback_from_environ({"CONTENT_LENGTH": "", "wsgi.input": io.BytesIO(b"")}) is None
    assert callback_from_environ({}) is None
