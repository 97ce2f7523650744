"""Translation API."""
from provision_ai.web.api.translate.views import router

__all__ = ["router"]
