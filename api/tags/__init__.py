"""
Tag resource: tag CRUD and paged listing.
"""
