"""
Listing service data layer.

Create and read access to owners and listings stored in MongoDB.
"""

__version__ = "1.0.0"
