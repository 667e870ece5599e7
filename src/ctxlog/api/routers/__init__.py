"""
ctxlog.api.routers

HTTP route modules.
"""
