"""
Installed-module and update-status collaborators.
"""
