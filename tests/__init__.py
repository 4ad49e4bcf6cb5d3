"""
Repository-level test suites.

This package contains:
- cross_service/: the polling client driven against the mock auth server in-process
- performance/: Locust load profiles for a running server
"""
