# Middleware package init
"""
Album API — Middleware Package
===============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    Request ID runs first so the access log line carries the ID; the
    response passes back through both in reverse order.
"""
