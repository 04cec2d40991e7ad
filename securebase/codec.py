"""
SecureBase Codec
================
Base64-style 3-byte -> 4-symbol codec over a default or key-derived alphabet.

Encoding mode (fixed per codec):
    UTF8     text plaintext is serialised as UTF-8; wire form is ASCII
    UNICODE  text plaintext is serialised as UTF-16-LE; wire form is UTF-16-LE

Every encode/decode fault surfaces as InvalidDataError; nothing partial
is ever returned.
"""

import logging
from enum import Enum
from typing import Union

from .alphabet import DEFAULT_ALPHABET, Alphabet, build_alphabet
from .errors import InvalidDataError

logger = logging.getLogger(__name__)

_FAULTS = (IndexError, KeyError, TypeError, ValueError)


class Encoding(Enum):
    UNICODE = 0
    UTF8    = 1

    @property
    def text_codec(self) -> str:
        return "utf-16-le" if self is Encoding.UNICODE else "utf-8"

    @property
    def wire_codec(self) -> str:
        return "utf-16-le" if self is Encoding.UNICODE else "ascii"


class SecureBase:
    """
    Keyed base64 codec.

        sb = SecureBase(Encoding.UTF8, "my secret")
        text = sb.encode("hello")
        assert sb.decode(text) == "hello"
    """

    def __init__(self, encoding: Encoding = Encoding.UTF8, secret_key: str = ""):
        if not isinstance(encoding, Encoding):
            raise ValueError(f"encoding must be an Encoding, got {encoding!r}")
        self._encoding = encoding
        self._alphabet = build_alphabet(secret_key)

    def set_secret_key(self, secret_key: str) -> None:
        """Re-derive the alphabet; an empty key restores standard base64."""
        self._alphabet = build_alphabet(secret_key)

    @property
    def encoding(self) -> Encoding:
        return self._encoding

    @property
    def alphabet(self) -> str:
        return self._alphabet.symbols

    @property
    def padding(self) -> str:
        return self._alphabet.padding

    # -- text level ----------------------------------------------------------

    def encode(self, plaintext: Union[str, bytes]) -> str:
        """Encode text (serialised per the encoding mode) or raw bytes."""
        try:
            if isinstance(plaintext, str):
                plaintext = plaintext.encode(self._encoding.text_codec)
            return _encode(bytes(memoryview(plaintext)), self._alphabet)
        except _FAULTS as exc:
            raise InvalidDataError() from exc

    def decode(self, text: Union[str, bytes]) -> str:
        """Decode to text using the encoding mode's plaintext serialisation."""
        data = self.decode_bytes(text)
        try:
            return data.decode(self._encoding.text_codec)
        except UnicodeDecodeError as exc:
            raise InvalidDataError() from exc

    # -- byte level ----------------------------------------------------------

    def encode_bytes(self, data: bytes) -> str:
        try:
            return _encode(bytes(memoryview(data)), self._alphabet)
        except _FAULTS as exc:
            raise InvalidDataError() from exc

    def decode_bytes(self, text: Union[str, bytes]) -> bytes:
        """Decode symbols (or their wire bytes) back into the original payload."""
        if isinstance(text, (bytes, bytearray, memoryview)):
            text = self.from_wire(text)
        try:
            if not isinstance(text, str):
                raise TypeError(f"Expected encoded text, got {type(text).__name__}")
            return _decode(text, self._alphabet)
        except _FAULTS as exc:
            raise InvalidDataError() from exc

    # -- wire form -----------------------------------------------------------

    def to_wire(self, text: str) -> bytes:
        try:
            return text.encode(self._encoding.wire_codec)
        except (AttributeError, UnicodeEncodeError) as exc:
            raise InvalidDataError() from exc

    def from_wire(self, raw: bytes) -> str:
        try:
            return bytes(raw).decode(self._encoding.wire_codec)
        except UnicodeDecodeError as exc:
            raise InvalidDataError() from exc

    def __repr__(self):
        keyed = "standard" if self._alphabet == DEFAULT_ALPHABET else "keyed"
        return f"SecureBase({self._encoding.name}, {keyed})"


def _encode(data: bytes, alphabet: Alphabet) -> str:
    table = alphabet.symbols
    pad   = alphabet.padding
    whole = len(data) - len(data) % 3
    out   = []

    for i in range(0, whole, 3):
        chunk = (data[i] << 16) | (data[i + 1] << 8) | data[i + 2]
        out.append(table[(chunk >> 18) & 63])
        out.append(table[(chunk >> 12) & 63])
        out.append(table[(chunk >> 6) & 63])
        out.append(table[chunk & 63])

    tail = data[whole:]
    if len(tail) == 1:
        b0 = tail[0]
        out += [table[b0 >> 2], table[(b0 & 3) << 4], pad, pad]
    elif len(tail) == 2:
        b0, b1 = tail
        out += [table[b0 >> 2], table[((b0 & 3) << 4) | (b1 >> 4)], table[(b1 & 15) << 2], pad]

    logger.debug(f"Encoded {len(data)}B -> {len(out)} symbols")
    return "".join(out)


def _decode(text: str, alphabet: Alphabet) -> bytes:
    if not text:
        return b""
    if len(text) % 4:
        raise ValueError(f"Encoded length {len(text)} is not a multiple of 4.")

    pad = alphabet.padding
    padding_count = 0
    if text[-1] == pad:
        padding_count += 1
        if text[-2] == pad:
            padding_count += 1
    if pad in text[:len(text) - padding_count]:
        raise ValueError("Padding symbol inside encoded body.")

    values = {symbol: i for i, symbol in enumerate(alphabet.symbols)}
    values[pad] = 0

    out_len = (len(text) * 3) // 4 - padding_count
    out = bytearray()
    for i in range(0, len(text), 4):
        chunk = ((values[text[i]] << 18) | (values[text[i + 1]] << 12)
                 | (values[text[i + 2]] << 6) | values[text[i + 3]])
        out.append((chunk >> 16) & 255)
        if len(out) < out_len:
            out.append((chunk >> 8) & 255)
        if len(out) < out_len:
            out.append(chunk & 255)

    logger.debug(f"Decoded {len(text)} symbols -> {len(out)}B")
    return bytes(out)
