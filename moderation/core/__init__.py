# moderation/core/__init__.py

"""Core domain models and utilities used across the moderation engine.

This package provides domain types, exceptions, and the rule catalogue
loader shared by the rest of the application.
"""
