"""
Test Fixtures and Utilities

Shared test data and an in-memory PocketSmith ledger for testing.

All test data is synthetic and does not contain real financial information.
"""
