"""API routes package."""

from . import vocabulary
from . import settings
