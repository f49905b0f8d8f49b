"""
Pydantic schemas for API request/response validation.
"""

from .common import *
from .gateway import *
from .disaster import *
