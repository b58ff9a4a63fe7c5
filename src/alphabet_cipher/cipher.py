from typing import List, Optional

from .config import DEFAULT_POLICY, ValidationPolicy, check_policy

# Closed alphabet: space through underscore.
LOWER_RANGE = " "
UPPER_RANGE = "_"
LOWER = ord(LOWER_RANGE)
UPPER = ord(UPPER_RANGE)
RANGE = UPPER - LOWER + 1

ALPHABET = "".join(chr(code) for code in range(LOWER, UPPER + 1))


class CipherError(ValueError):
    """Base class for errors raised by the alphabet transforms."""


class OutOfBoundsError(CipherError):
    """Raised when text contains a character outside the alphabet."""

    def __init__(self, text: str, position: int, what: str = "text") -> None:
        self.text = text
        self.position = position
        self.char = text[position]
        super().__init__(
            f"{what.capitalize()} is not in bounds: {self.char!r} (code {ord(self.char)}) "
            f"at position {position}; allowed range is {LOWER_RANGE!r}..{UPPER_RANGE!r}."
        )


class InvalidKeyError(CipherError):
    """Raised when a Bellaso key phrase is unusable."""


def first_out_of_bounds(text: str) -> Optional[int]:
    """Return the index of the first character outside the alphabet, or None."""
    for idx, ch in enumerate(text):
        if not LOWER <= ord(ch) <= UPPER:
            return idx
    return None


def is_in_bounds(text: str) -> bool:
    """True if every character of `text` lies within the alphabet."""
    return first_out_of_bounds(text) is None


def wrap_code(code: int) -> int:
    """Reduce any integer code into [LOWER, UPPER] modulo RANGE."""
    return LOWER + (code - LOWER) % RANGE


def _require_in_bounds(text: str, what: str = "text") -> None:
    position = first_out_of_bounds(text)
    if position is not None:
        raise OutOfBoundsError(text, position, what)


def extend_key(key_phrase: str, length: int) -> str:
    """
    Repeat `key_phrase` until it covers `length` characters.

    The working key is grown one character at a time from its own prefix,
    with the read cursor reset whenever it reaches the current key length.
    The result matches index-modulo repetition of the phrase.
    """
    if not key_phrase:
        raise InvalidKeyError("Key phrase must not be empty.")
    working: List[str] = list(key_phrase)
    cursor = 0
    while len(working) < length:
        if cursor == len(working):
            cursor = 0
        working.append(working[cursor])
        cursor += 1
    return "".join(working[:length])


def _upper(ch: str) -> str:
    # ASCII-only so every character maps to exactly one character.
    if "a" <= ch <= "z":
        return chr(ord(ch) - 32)
    return ch


def caesar_encode(text: str, key: int, policy: ValidationPolicy = DEFAULT_POLICY) -> str:
    """
    Shift every character of `text` by `key` positions within the alphabet.

    The text is bounds-checked before being uppercased, so lowercase letters
    are rejected unless the policy is "none".
    """
    if check_policy(policy) != "none":
        _require_in_bounds(text)
    return "".join(chr(wrap_code(ord(ch) + key)) for ch in map(_upper, text))


def caesar_decode(text: str, key: int, policy: ValidationPolicy = DEFAULT_POLICY) -> str:
    """Inverse of caesar_encode for the same key."""
    if check_policy(policy) == "all":
        _require_in_bounds(text)
    return "".join(chr(wrap_code(ord(ch) - key)) for ch in map(_upper, text))


def _bellaso_checks(text: str, key_phrase: str, policy: ValidationPolicy) -> str:
    key = extend_key(key_phrase, len(text))
    if check_policy(policy) == "all":
        _require_in_bounds(key_phrase, "key phrase")
        _require_in_bounds(text)
    return key


def bellaso_encode(text: str, key_phrase: str, policy: ValidationPolicy = DEFAULT_POLICY) -> str:
    """
    Offset each character by the code of the matching key phrase character.

    The key phrase is repeated to the length of the text. No case
    normalisation is applied.
    """
    key = _bellaso_checks(text, key_phrase, policy)
    result: List[str] = []
    for plain, k in zip(text, key):
        result.append(chr(wrap_code(ord(plain) + ord(k))))
    return "".join(result)


def bellaso_decode(text: str, key_phrase: str, policy: ValidationPolicy = DEFAULT_POLICY) -> str:
    """Inverse of bellaso_encode for the same key phrase."""
    key = _bellaso_checks(text, key_phrase, policy)
    result: List[str] = []
    for enc, k in zip(text, key):
        result.append(chr(wrap_code(ord(enc) - ord(k))))
    return "".join(result)
