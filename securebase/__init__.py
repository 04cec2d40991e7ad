"""
securebase — Keyed Base64 over a Keccak Sponge
==============================================
A base64-style codec whose 64-symbol alphabet is permuted from a secret
key, and the Keccak-f[1600] sponge hash that derives it.

Layers:
    keccak    — Keccak-f[1600] permutation, sponge, disposable hash session
    alphabet  — secret key -> 512-bit digest -> shuffled 64-symbol table + padding
    codec     — 3-byte <-> 4-symbol encode/decode, UTF-8 or UTF-16-LE text modes

Not hardened: no constant-time guarantees, and the keyed alphabet is an
obfuscation layer, not encryption.

Author : Beytullah Akyuz
License: Apache 2.0
"""

__version__  = "1.0.0"
__author__   = "Beytullah Akyuz"
__project__  = "SecureBase"

from .errors    import SecureBaseError, ObjectDisposedError, InvalidDataError
from .keccak    import Keccak, keccak_hex
from .alphabet  import Alphabet, build_alphabet, BASE64_STANDARD, DEFAULT_PADDING
from .codec     import SecureBase, Encoding

__all__ = [
    "SecureBaseError",
    "ObjectDisposedError",
    "InvalidDataError",
    "Keccak",
    "keccak_hex",
    "Alphabet",
    "build_alphabet",
    "BASE64_STANDARD",
    "DEFAULT_PADDING",
    "SecureBase",
    "Encoding",
]
