"""
Notes AI Proxy - Application Package
====================================

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      TaskExecutor (Task Logic)      │  ← prompt → one call → normalize
    ├─────────────────────────────────────┤
    │     LLMService / GroqService        │  ← the single upstream request
    └─────────────────────────────────────┘

    Nothing is persisted; every request is independent.
"""

__version__ = "1.0.0"
