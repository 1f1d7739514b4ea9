"""Client code generation.

A client code is three uppercase letters derived from the client's name
followed by a zero-padded three digit suffix, e.g. ``ACP001``. The letters come
from the word initials of the name; the suffix is the first one not already
taken by another client with the same letters.
"""
import string
import unicodedata
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clientcontacts.clients.models import Client
from clientcontacts.exceptions import ValidationFailed

PREFIX_LENGTH = 3
SUFFIX_WIDTH = 3
MAX_SUFFIX = 10 ** SUFFIX_WIDTH - 1
EMPTY_NAME_PREFIX = "AAA"


def _letter_words(name: str) -> List[str]:
    """Split `name` into words reduced to ASCII A-Z.

    Accents are folded (É -> E), everything else that is not a letter is
    dropped, and words left empty are skipped.
    """
    words = []
    for word in (name or "").split():
        folded = unicodedata.normalize("NFKD", word).upper()
        letters = "".join(ch for ch in folded if ch in string.ascii_uppercase)
        if letters:
            words.append(letters)
    return words


def derive_code_prefix(name: str) -> str:
    """Return the three-letter part of a client code for `name`.

    >>> derive_code_prefix("Acme Corp Partners")
    'ACP'
    >>> derive_code_prefix("Acme Corp")
    'ACO'
    >>> derive_code_prefix("X")
    'XAB'
    """
    words = _letter_words(name)

    if len(words) >= 3:
        alpha = "".join(word[0] for word in words[:3])
    elif len(words) == 2:
        alpha = words[0][0] + words[1][:2]
    elif len(words) == 1:
        alpha = words[0][:PREFIX_LENGTH]
    else:
        return EMPTY_NAME_PREFIX

    # Position 1 is filled with A, position 2 with B
    for position in range(len(alpha), PREFIX_LENGTH):
        alpha += string.ascii_uppercase[position - 1]
    return alpha


def format_code(prefix: str, number: int) -> str:
    return f"{prefix}{number:0{SUFFIX_WIDTH}d}"


async def generate_client_code(db: AsyncSession, name: str) -> str:
    """Find the first free code for `name`, probing suffixes from 001 to 999.

    This is a plain read-then-write: two concurrent creations with the same
    prefix can pick the same code, in which case the unique constraint on
    ``clients.code`` rejects the second insert.

    Raises:
        ValidationFailed: every suffix for the prefix is taken
    """
    prefix = derive_code_prefix(name)
    for number in range(1, MAX_SUFFIX + 1):
        candidate = format_code(prefix, number)
        result = await db.execute(select(Client.id).where(Client.code == candidate))
        if result.scalar_one_or_none() is None:
            return candidate

    raise ValidationFailed(
        "Error creating client",
        f"No client codes left for prefix {prefix}",
    )
