"""
Retail Seed

Idempotent reference-data seeding for the retail management datastore.
"""

__version__ = "1.0.0"
