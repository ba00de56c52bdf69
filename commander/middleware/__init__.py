# Middleware package init
"""
Commander Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    The request id is assigned first so the access log line carries it.
"""
