"""State layer.

This package owns the client-side projection of forum entities and the
only code path allowed to change it: optimistic mutations that are
confirmed or rolled back against the server.
"""
