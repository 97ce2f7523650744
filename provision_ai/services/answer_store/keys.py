"""Document keys of answer records."""

import hashlib
import re

from provision_ai.settings import KeyStrategy

_WHITESPACE = re.compile(r"\s+")


def normalize_question(question: str) -> str:
    """
    Lower-case, trim and collapse whitespace.

    :param question: Question as received
    :return: Canonical form of the question
    """
    return _WHITESPACE.sub(" ", question.strip().lower())


def document_key(question: str, strategy: KeyStrategy = KeyStrategy.RAW) -> str:
    """
    Key of the document an answer to ``question`` is stored under.

    :param question: Question as received
    :param strategy: Keying strategy
    :return: Document key
    """
    if strategy == KeyStrategy.NORMALIZED:
        return normalize_question(question)
    if strategy == KeyStrategy.HASHED:
        return hashlib.sha256(normalize_question(question).encode("utf-8")).hexdigest()
    return question
