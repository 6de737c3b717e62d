# Middleware package init
"""
SoulFinder Backend: Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Timeout] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation id for every log line of the request
    2. Logging: method, path, status, duration; sees the timeout's 504
    3. Timeout: cancels handlers that exceed request_timeout_seconds
    4. GZip: compresses responses over 500 bytes (large profile listings)

Authentication and authorization are route dependencies (security.py),
not middleware, because only some routes are guarded.
"""
