"""Request dependencies resolving the clients built at startup."""

from fastapi import Request

from provision_ai.services.admission import AdmissionLimiter
from provision_ai.services.ai import AnswerEngine
from provision_ai.services.translation import DeepLClient


def get_answer_engine(request: Request) -> AnswerEngine:
    """
    Get the answer engine of the application.

    :param request: current request.
    :return: answer engine.
    """
    return request.app.state.answer_engine


def get_admission_limiter(request: Request) -> AdmissionLimiter:
    """
    Get the admission limiter of the application.

    :param request: current request.
    :return: admission limiter.
    """
    return request.app.state.admission_limiter


def get_translation_client(request: Request) -> DeepLClient:
    """
    Get the DeepL client of the application.

    :param request: current request.
    :return: DeepL client.
    """
    return request.app.state.translation_client
