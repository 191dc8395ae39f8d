"""
Core module for the Daily Digest reader.
"""

from .config import Settings, load_settings
from .deadline import Deadline
from .exceptions import *
from .exceptions import __all__ as _exception_names
from .models import DailyDigest, DigestReport

__all__ = ["Settings", "load_settings", "Deadline", "DailyDigest", "DigestReport"] + _exception_names
