"""
Persistent key/value configuration variables.
"""

from forget_me_not.variables.models import ConfigVariable
from forget_me_not.variables.repository import VariableRepository

__all__ = ["ConfigVariable", "VariableRepository"]
