"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that several features use (DB wiring,
schema bootstrap, settings, email and image storage clients). Keep
feature-specific SQL and business logic in the feature package
(e.g. `houses/`).
"""
