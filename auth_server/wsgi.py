"""WSGI entry point for the mock auth server."""

import os

from auth_server.auth_server_app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
