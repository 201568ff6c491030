"""
perkdb: normalizes loosely structured perk sheet exports into a JSON database.
"""
__version__ = "0.1.0"
