"""
services/ - Service Layer
=========================
Async entry points used by the request-handling front end.
"""
