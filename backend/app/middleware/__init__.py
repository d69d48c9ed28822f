# Middleware package init
"""
Notes AI Proxy - Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first so the access log line carries it
    2. Logging measures the full handler duration, upstream call included
    3. CORS answers preflight requests from the notes frontend
"""
