"""Storage layer.

This module persists production and delivery records as whole JSON
documents and exposes keyed query, upsert, and delete operations.
"""
