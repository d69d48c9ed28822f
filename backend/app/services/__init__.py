# Services package init
"""
Notes AI Proxy - Services Layer
===============================

Service Inventory:
    - LLMService (abstract): one-shot completion interface
    - GroqService: LLMService over Groq's chat-completions API (httpx)
    - prompts: fixed system prompt per task kind
    - normalizers: completion text → typed task result
    - TaskExecutor: prompt selection, upstream call, normalization
"""
