"""
Decoding of completion callbacks posted by the Deflate API.

When a job is submitted with ``wait=False`` the API POSTs the result to the
callback URL instead. The host application owns the web server; these helpers
only turn the raw body it received into Python data.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Union

log = logging.getLogger("deflate.webhook")

Body = Union[bytes, bytearray, str]


def callback_response(body: Body) -> Optional[Any]:
    """Decode a callback body verbatim; no schema is enforced.

    Returns None for an empty or undecodable body.
    """
    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            log.warning("callback body is not UTF-8: %s", e)
            return None
    if not body.strip():
        log.warning("callback body is empty")
        return None
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        log.warning("callback body is not valid JSON: %s", e)
        return None


def callback_from_environ(environ: Mapping[str, Any]) -> Optional[Any]:
    """Read and decode the request body from a WSGI environ."""
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    stream = environ.get("wsgi.input")
    if stream is None or length <= 0:
        return callback_response(b"")
    return callback_response(stream.read(length))
