from fastapi.routing import APIRouter

from provision_ai.web.api import ask_ai, monitoring, translate

api_router = APIRouter()
api_router.include_router(monitoring.router)
api_router.include_router(ask_ai.router, prefix="/ask-ai", tags=["ask-ai"])
api_router.include_router(translate.router, prefix="/translate", tags=["translate"])
