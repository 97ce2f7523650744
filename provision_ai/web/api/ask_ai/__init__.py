"""Ask AI API."""
from provision_ai.web.api.ask_ai.views import router

__all__ = ["router"]
