"""
Technology resource: technology CRUD and paged listing.
"""
