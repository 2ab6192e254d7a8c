"""
Domain layer - Core lending rules and models.

This module contains the entities, policies and error types of the lending
core, isolated from external concerns like CSV files and consoles.
"""
