"""Legacy data migration pipeline.

This module reads the legacy dataset and applies the record transforms.
It prepares canonical material documents for preview and the store layer.
"""
