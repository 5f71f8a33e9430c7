"""Catalog ingestion pipeline.

This module reads raw CSV sources and drives the staged transforms.
It hands clean, resolved rows to the store layer.
"""
