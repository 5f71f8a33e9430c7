"""Normalized catalog storage layer.

This module declares the relational tables and loads them per run.
It powers catalog reads for the SDK and CLI.
"""
