"""Role menu access application for the hospital management backend.

This package holds the static navigation registry, the role based
filtering of categories, sidebar items, page tabs and queue service
points, the per-user navigation tracker and the REST endpoints used by
the front-end to read and configure role grants.
"""
