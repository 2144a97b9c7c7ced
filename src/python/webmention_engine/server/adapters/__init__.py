"""
Web framework adapters.

Import them explicitly, e.g. ``webmention_engine.server.adapters.flask``, so
that the framework dependencies stay optional.
"""
