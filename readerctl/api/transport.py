import sys
from typing import Optional, TextIO

import requests
from requests.adapters import HTTPAdapter


class ReaderTransport(HTTPAdapter):
    """HTTP adapter that authorizes every request with a Reader API token.

    When debug is enabled, the full request and response are dumped to
    debug_stream. The response body stays readable for callers because
    requests caches it once read.
    """

    def __init__(self, token: str, debug: bool = False, debug_stream: Optional[TextIO] = None, **kwargs):
        super().__init__(**kwargs)
        self.authorization_header = f"Token {token}"
        self.debug = debug
        self.debug_stream = debug_stream

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        request.headers['Authorization'] = self.authorization_header
        response = super().send(request, **kwargs)

        if self.debug:
            stream = self.debug_stream or sys.stderr
            stream.write(dump_request(request))
            stream.write(dump_response(response))
            stream.flush()

        return response


def _decode_body(body) -> str:
    if body is None:
        return ''
    if isinstance(body, bytes):
        return body.decode('utf-8', errors='replace')
    if isinstance(body, str):
        return body
    # Streamed or file-like bodies are not rendered
    return f'<{type(body).__name__} body>'


def dump_request(request: requests.PreparedRequest) -> str:
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    return '\n'.join(lines) + '\n\n' + _decode_body(request.body) + '\n\n'


def dump_response(response: requests.Response) -> str:
    lines = [f"HTTP {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return '\n'.join(lines) + '\n\n' + _decode_body(response.content) + '\n\n'


def build_session(token: str, debug: bool = False, debug_stream: Optional[TextIO] = None) -> requests.Session:
    """Create a session that sends every request through ReaderTransport"""
    session = requests.Session()
    transport = ReaderTransport(token, debug=debug, debug_stream=debug_stream)
    session.mount('http://', transport)
    session.mount('https://', transport)
    return session
