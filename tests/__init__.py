"""
Test suite for btree-fraction

Contains:
- tests/unit/          : Unit tests for individual modules
"""
