"""
Education resource: education CRUD and paged listing.
"""
