"""Adapters that feed external records into the lending core."""
