"""
Shared input validation helpers.
"""
