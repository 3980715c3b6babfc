"""
Domain layer - Errors raised by the listing service.

Independent of the storage driver and of any API framework.
"""
