"""
ctxlog.api

Demo HTTP service wiring the logging middleware into a FastAPI app.
"""
