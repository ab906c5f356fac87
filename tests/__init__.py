"""
Test suite for decorated-numerics

Contains:
- tests/unit/          : Unit tests for individual modules
"""
