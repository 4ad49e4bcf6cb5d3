"""Helpers shared by the mock auth server and the polling client."""
