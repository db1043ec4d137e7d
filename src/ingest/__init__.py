"""Data ingestion.

This module parses delimited text and spreadsheets into records and
reconciles incoming batches against the stores.
"""
