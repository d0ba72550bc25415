"""
Test suite for polyengine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
