"""Errors raised while generating an answer."""

from typing import Any

import openai


def provider_error_details(error: Exception) -> Any:
    """
    Extract the diagnostic payload of a provider error.

    HTTP status errors carry the provider's parsed error body, anything
    else is reduced to its message.

    :param error: Exception raised by the provider call
    :return: JSON-serializable error details
    """
    if isinstance(error, openai.APIStatusError):
        if error.body is not None:
            return error.body
        return error.message
    return str(error)


class AnswerGenerationError(Exception):
    """The completion step failed, no answer can be returned."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.details = details
