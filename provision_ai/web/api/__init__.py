"""provision_ai API package."""

from provision_ai.web.api import ask_ai, monitoring, translate

__all__ = ["ask_ai", "monitoring", "translate"]
