"""
Serving — FastAPI application for the document assistant.

The ASGI application object is ``doc_assistant.serving.app:app``.
"""
