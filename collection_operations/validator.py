"""
Collection name validation.

The create pipeline consults a name validator before doing any work. Any
object with a `validate(collection_name) -> Status` method can play that
role; `CollectionNameValidator` implements the standard naming rules.
"""

import logging
from typing import Protocol

from hybrid_ops_exceptions import StatusCode

from .entities import Status

logger = logging.getLogger(__name__)


class NameValidator(Protocol):
    """Pass/fail gate for proposed collection names."""

    def validate(self, collection_name: str) -> Status:
        ...


class CollectionNameValidator:
    """
    Validates collection names against the standard naming rules.

    A valid name is non-empty, at most `MAX_NAME_LENGTH` characters long,
    starts with an underscore or an ASCII letter, and otherwise contains only
    underscores, ASCII letters and ASCII digits.
    """

    MAX_NAME_LENGTH = 255

    @classmethod
    def validate(cls, collection_name: str) -> Status:
        """
        Checks `collection_name` against the naming rules.

        Returns:
            A successful `Status`, or an INVALID_ARGUMENT status whose
            message describes the first violated rule.
        """
        if not isinstance(collection_name, str) or not collection_name:
            return cls._invalid("Collection name should not be empty")

        invalid_msg = f"Invalid collection name: {collection_name}. "
        if len(collection_name) > cls.MAX_NAME_LENGTH:
            return cls._invalid(
                invalid_msg + f"The length of a collection name must be less than "
                f"{cls.MAX_NAME_LENGTH} characters."
            )

        first = collection_name[0]
        if first != "_" and not _is_ascii_letter(first):
            return cls._invalid(
                invalid_msg + "The first character of a collection name must be an "
                "underscore or letter."
            )

        for char in collection_name[1:]:
            if char != "_" and not _is_ascii_letter(char) and not _is_ascii_digit(char):
                return cls._invalid(
                    invalid_msg + "Collection name can only contain numbers, letters, "
                    "and underscores."
                )

        return Status.success()

    @staticmethod
    def _invalid(message: str) -> Status:
        logger.debug(message)
        return Status.error(StatusCode.INVALID_ARGUMENT, message)


def _is_ascii_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_ascii_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()
