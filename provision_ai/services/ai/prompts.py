"""Prompt text sent to the completion model."""

COACH_SYSTEM_PROMPT = (
    "You are an expert FIFA coach and EA FC25 strategist. "
    "Your tone should be friendly yet professional, guiding a serious gamer. "
    "Limit responses to exactly 100 words to keep them focused and complete."
)


def build_user_message(question: str) -> str:
    """
    Wrap the player's question for the completion request.

    :param question: Question exactly as the player typed it
    :return: User message content
    """
    return f'\n\nQuestion: "{question}"'


def build_messages(question: str) -> list:
    """
    Build the chat messages for a coaching answer.

    :param question: Question exactly as the player typed it
    :return: Messages in chat completion format
    """
    return [
        {"role": "system", "content": COACH_SYSTEM_PROMPT},
        {"role": "user", "content": build_user_message(question)},
    ]
