# Routes package init
"""
Notes AI Proxy - API Routes Package
===================================

Route Inventory:
    - health.py:  GET  /                 (server info)
                  GET  /api/health       (AI service configured?)
    - ai.py:      POST /api/ai           (run summarize/tags/grammar/glossary)

Routes stay thin: they read the request, check preconditions, call
TaskExecutor and shape the response. Task logic lives in app.services.
"""
