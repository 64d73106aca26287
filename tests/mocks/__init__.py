"""
Centralized fakes for testing.

This package provides reusable channel fakes and wait helpers for session
and endpoint tests.
"""
