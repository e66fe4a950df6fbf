"""
Shared, cross-cutting code for both services.

`core/` holds small building blocks the features use (settings, logging,
HTTP plumbing, the request counter, DB wiring). Feature-specific logic lives
in the feature packages (`definitions/`, `sql_proxy/`).
"""
