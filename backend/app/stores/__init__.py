"""Persistence functions for employees, projects and objectives.

Every function takes the request-scoped ``Session`` as its first argument.
Lookups return ``None`` when the row does not exist.
"""
