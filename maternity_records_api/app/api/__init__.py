"""
HTTP API package.

Versioned JSON routers live under ``v1``; ``deps`` holds the FastAPI
dependencies shared with the HTML routes in ``web``.
"""
