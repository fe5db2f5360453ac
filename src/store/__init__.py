"""Document store layer.

This module serializes canonical material documents and writes
accepted batches to MongoDB.
"""
