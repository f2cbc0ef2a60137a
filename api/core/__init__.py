"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks the feature packages lean on
(DB wiring, error mapping, logging). Keep blog SQL and request handling
in `blogs/`.
"""
