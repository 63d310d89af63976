"""
Commerce Hub

Multi-tenant commerce back office with a conversational intent pipeline.
"""

__version__ = "0.1.0"
