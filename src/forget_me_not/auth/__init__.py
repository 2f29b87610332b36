"""
Authentication and permission checks.
"""
