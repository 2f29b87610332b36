"""
HTML rendering for the administration pages.
"""
