# Middleware package init
"""
Idea Canvas Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line and error body carries it
    2. Rate limit rejects abusive clients before any database work
    3. Logging records status and duration on the way back out
"""
