"""API for checking project status."""
from provision_ai.web.api.monitoring.views import router

__all__ = ["router"]
