# Middleware package init
"""
Wrapped Backend - Middleware Package
======================================

Cross-cutting concerns applied to every request:

    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - request_id.py: correlation ID in a ContextVar and the X-Request-ID header
    - logging.py:    one access-log line per request with status and duration
"""
