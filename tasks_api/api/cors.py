"""
api/cors.py
-----------
Optional cross-origin adapter. Requests from an allowed origin get CORS
headers; any other origin gets a plain response.
"""

from typing import Iterable

from flask import Flask
from flask_cors import CORS

ALLOWED_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']


def init_cors(app: Flask, allowed_origins: Iterable[str]) -> None:
    """Enable Flask-CORS on ``app`` for the given origins. No-op without origins."""
    origins = sorted(set(allowed_origins))
    if not origins:
        return

    CORS(
        app,
        origins=origins,
        methods=ALLOWED_METHODS,
        supports_credentials=True,
    )
