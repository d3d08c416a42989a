"""Integration tests for the claim registry.

These tests drive the registry through create_registry with the mock
collaborators and the SQLite audit trail, checking full claim lifecycles.

Test categories:
- test_lifecycle.py: End-to-end lifecycle and audit trail tests
"""
