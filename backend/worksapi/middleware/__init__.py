# Middleware package init
"""
Works API - Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → [Unhandled Error] → Route Handler

    1. Request ID: correlation id in a ContextVar and the X-Request-ID header
    2. Logging: one access line per request, tagged with the id
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)
    4. Unhandled Error: last-resort 500 JSON body for unmapped exceptions
"""
