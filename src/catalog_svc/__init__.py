"""
Catalog Service - Attribute-gated data catalog

Produces access-filtered views of a project's compiled explores:
- Table and field listings
- Free-text catalog search
- Single table metadata
- Chart usage analytics

Every element returned is gated by the caller's project/space permissions
and by the required user attributes attached to tables and fields.
"""

__version__ = "0.1.0"
