"""
DIGI Homes property-listing API.
"""
