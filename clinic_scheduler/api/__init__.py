"""
HTTP layer: error envelope, exception handlers, middleware and the root router.
"""
