"""
Test suite for the confidential surge pricing lifecycle

Contains:
- tests/unit/          : Unit tests for individual modules and the lifecycle
"""
