"""
Work history resource: work history CRUD and paged listing.
"""
