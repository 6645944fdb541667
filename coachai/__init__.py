"""CoachAI client: authenticated sessions and coaching chat transcripts."""

from coachai.client import CoachClient
from coachai.config import ClientSettings, configure_logging

__all__ = ["CoachClient", "ClientSettings", "configure_logging"]

__version__ = "0.1.0"
