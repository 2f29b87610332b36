"""
forget-me-not: exclude modules from update-status checks.
"""

__version__ = "0.1.0"
