"""
DevConnector Backend: Middleware Package
=========================================

Middleware Chain:
    Request → [Request ID] → [Access Logging] → [GZip] → [CORS] → Route

Request ID runs first so the access log line (written on the way back)
carries the correlation id. Token verification is NOT middleware: it is a
per-route dependency, because public and private routes share prefixes.
"""
