"""
Key-Derived Alphabet
====================
Turns a secret key into a 64-symbol encoding table plus a padding symbol.

    key --Keccak-512--> digest --hex--> 128 chars --> key values
        --> multiplicative swap shuffle of EXTENDED_CHARSET
        --> symbols = shuffled[:64], padding = shuffled[64]

An empty key selects the standard base64 table and "=".

Note on key values: each value is computed from a fresh zero accumulator,
so value i is simply the code of hex character i. A true rolling hash would
re-key every existing alphabet, so the per-character form is kept.
"""

import logging
import binascii
from contextlib import contextmanager
from typing import NamedTuple

from .keccak import Keccak

logger = logging.getLogger(__name__)

BASE64_STANDARD = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
DEFAULT_PADDING = "="

EXTENDED_CHARSET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
    "!\"#&'()*,-.:;<>?@[]\\^_{}|~/+="
)

KEY_DIGEST_BITS = 512
ALPHABET_SIZE   = 64
_MAX_INT32      = 2147483647


class Alphabet(NamedTuple):
    symbols: str
    padding: str


DEFAULT_ALPHABET = Alphabet(BASE64_STANDARD, DEFAULT_PADDING)


@contextmanager
def _scrubbed(*buffers):
    """Zero every mutable buffer on the way out, error paths included."""
    try:
        yield buffers
    finally:
        for buf in buffers:
            for i in range(len(buf)):
                buf[i] = 0


def derive_key_values(hex_digest) -> list:
    """
    One integer per hex character; the final slot stays 0.
    Accepts str or a bytes-like of ASCII codes.
    """
    codes = [ord(ch) for ch in hex_digest] if isinstance(hex_digest, str) else list(hex_digest)
    values = [0] * len(codes)
    for i in range(len(codes) - 1):
        h = 0
        h = (h * 31 + codes[i]) % _MAX_INT32
        values[i] = h
    return values


def shuffle_charset(charset: str, keys: list) -> str:
    """
    Deterministic multiplicative swap shuffle. Every key but the last makes
    one backward pass swapping position i with (i * key) % len(charset).
    """
    chars = list(charset)
    n = len(chars)
    for key in keys[:-1]:
        for i in range(n - 1, 0, -1):
            x = (i * key) % n
            chars[i], chars[x] = chars[x], chars[i]
    return "".join(chars)


def build_alphabet(secret_key: str = "") -> Alphabet:
    """Derive (symbols, padding) for `secret_key`; empty key -> DEFAULT_ALPHABET."""
    if not secret_key:
        return DEFAULT_ALPHABET

    digest, hex_digest, keys = bytearray(), bytearray(), []
    with _scrubbed(digest, hex_digest, keys):
        with Keccak() as k:
            digest[:] = k.hash(secret_key.encode("utf-8"), KEY_DIGEST_BITS)
        hex_digest[:] = binascii.hexlify(digest)
        keys[:] = derive_key_values(hex_digest)
        shuffled = shuffle_charset(EXTENDED_CHARSET, keys)

    alphabet = Alphabet(shuffled[:ALPHABET_SIZE], shuffled[ALPHABET_SIZE])
    logger.debug(f"Derived keyed alphabet ({len(alphabet.symbols)} symbols + padding)")
    return alphabet
