"""Service catalog app package.

Service offerings are the named pricing categories (airport transfer,
daily hire, hourly hire, ...) that vehicles expose with their own prices.
Only administrators curate the catalog.
"""
