"""
KECCAK SPONGE  |  securebase
============================
Keccak-f[1600] permutation and a sponge hash with arbitrary output length.

State:    25 lanes of 64 bits (1600 bits), lane (x, y) -> state[x + 5*y]
Rounds:   24
Capacity: 2 * output_bits     Rate: 1600 - capacity  (both in bits)
Suffix:   0x06 ... 0x80       (SHA-3 style multi-rate padding)

IMPLEMENTATION NOTES:
The rho step rotates every lane in place by its offset; lanes are not
relocated between rho and chi. Digests therefore differ from published
FIPS 202 SHA-3 vectors, but they are the digests every SecureBase secret
key has always been derived from, so existing encoded data stays readable.

The session class serialises hash() and dispose() behind one lock and
zeroes its lanes on disposal.
"""

import struct
import logging
import threading

from .errors import ObjectDisposedError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------

# PERMUTATION CORE

# -----------------------------------------------------------------------------

LANES       = 25
ROUNDS      = 24
STATE_BYTES = 200    # 1600 bits

MASK64 = 0xFFFFFFFFFFFFFFFF

ROUND_CONSTANTS = (
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
    0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
    0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
    0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
    0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
)

# Flat index order: RHO_OFFSETS[x + 5*y]
RHO_OFFSETS = (
     0,  1, 62, 28, 27,
    36, 44,  6, 55, 20,
     3, 10, 43, 25, 39,
    41, 45, 15, 21,  8,
    18,  2, 61, 56, 14,
)


def rol64(value: int, n: int) -> int:
    """64-bit left rotate, n in [0, 63]."""
    if n == 0:
        return value
    return ((value << n) | (value >> (64 - n))) & MASK64


def keccak_f(state: list) -> None:
    """Apply the 24-round permutation to a 25-lane state, in place."""
    for rc in ROUND_CONSTANTS:
        # Theta
        c = [state[x] ^ state[x + 5] ^ state[x + 10] ^ state[x + 15] ^ state[x + 20]
             for x in range(5)]
        d = [c[(x + 4) % 5] ^ rol64(c[(x + 1) % 5], 1) for x in range(5)]
        for y in range(0, LANES, 5):
            for x in range(5):
                state[y + x] ^= d[x]

        # Rho
        b = [rol64(state[i], RHO_OFFSETS[i]) for i in range(LANES)]

        # Chi
        for y in range(0, LANES, 5):
            for x in range(5):
                state[y + x] = b[y + x] ^ ((~b[y + (x + 1) % 5] & MASK64) & b[y + (x + 2) % 5])

        # Iota
        state[0] ^= rc


# -----------------------------------------------------------------------------

# SPONGE ENGINE

# -----------------------------------------------------------------------------

DOMAIN_SUFFIX = 0x06
CLOSE_BIT     = 0x80


def sponge_params(output_bits: int) -> tuple:
    """
    Return (rate, capacity) in bytes for the requested digest length.
    Raises ValueError unless output_bits is a positive multiple of 8 that
    leaves a positive rate.
    """
    if isinstance(output_bits, bool) or not isinstance(output_bits, int):
        raise ValueError("output_bits must be an integer.")
    if output_bits <= 0 or output_bits % 8:
        raise ValueError("output_bits must be a positive multiple of 8.")
    capacity = 2 * output_bits // 8
    rate     = STATE_BYTES - capacity
    if rate <= 0:
        raise ValueError(f"output_bits={output_bits} leaves no rate (max {STATE_BYTES * 4 - 8}).")
    return rate, capacity


def pad(message: bytes, rate: int) -> bytearray:
    """
    Multi-rate padding. Always appends 1..rate bytes: the first carries the
    domain suffix, the last the close bit (both in one byte when only one
    is appended).
    """
    pad_len = rate - (len(message) % rate)
    padded = bytearray(len(message) + pad_len)
    padded[:len(message)] = message
    padded[len(message)] = DOMAIN_SUFFIX
    padded[-1] |= CLOSE_BIT
    return padded


def absorb(state: list, padded: bytes, rate: int) -> None:
    """XOR each rate-sized block into the leading lanes, permuting after each."""
    words = rate // 8
    fmt = f"<{words}Q"
    for offset in range(0, len(padded), rate):
        for i, word in enumerate(struct.unpack_from(fmt, padded, offset)):
            state[i] ^= word
        keccak_f(state)


def squeeze(state: list, length: int) -> bytes:
    """Emit exactly `length` bytes, up to a full state's worth per permutation."""
    out = bytearray()
    remaining = length
    while remaining > 0:
        chunk = min(remaining, STATE_BYTES)
        out += struct.pack(f"<{LANES}Q", *state)[:chunk]
        remaining -= chunk
        if remaining > 0:
            keccak_f(state)
    return bytes(out)


# -----------------------------------------------------------------------------

# HASH SERVICE

# -----------------------------------------------------------------------------

class Keccak:
    """
    Reusable hashing session owning one 25-lane state.

    Each hash() starts from an all-zero state. Calls on one session are
    serialised; dispose() zeroes the lanes and makes the session unusable.

        with Keccak() as k:
            digest = k.hash(b"data", 256)
    """

    ROUNDS      = ROUNDS
    STATE_BYTES = STATE_BYTES

    def __init__(self):
        self._state    = [0] * LANES
        self._disposed = False
        self._lock     = threading.Lock()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def hash(self, data: bytes, output_bits: int) -> bytes:
        """
        Hash `data` to output_bits // 8 bytes.
        Raises ObjectDisposedError after dispose(), ValueError for a bad
        output_bits.
        """
        with self._lock:
            if self._disposed:
                raise ObjectDisposedError()
            rate, _ = sponge_params(output_bits)
            self._reset()
            padded = pad(bytes(memoryview(data)), rate)
            try:
                absorb(self._state, padded, rate)
            finally:
                _wipe(padded)
            return squeeze(self._state, output_bits // 8)

    def hexdigest(self, data: bytes, output_bits: int) -> str:
        return self.hash(data, output_bits).hex()

    def dispose(self) -> None:
        """Zero the lanes and retire the session. Safe to call twice."""
        with self._lock:
            if self._disposed:
                return
            self._reset()
            self._disposed = True
            logger.debug("Keccak session disposed")

    def _reset(self) -> None:
        for i in range(LANES):
            self._state[i] = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False

    def __repr__(self):
        status = "disposed" if self._disposed else "active"
        return f"Keccak(f[1600], rounds={self.ROUNDS}, {status})"


def _wipe(buf: bytearray) -> None:
    for i in range(len(buf)):
        buf[i] = 0


def keccak_hex(data: bytes, output_bits: int) -> str:
    """One-shot hash returning a lowercase hex digest; the session is disposed."""
    with Keccak() as k:
        return k.hexdigest(data, output_bits)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=' %(message)s')

    for bits in (224, 256, 384, 512):
        rate, capacity = sponge_params(bits)
        logger.info(f"Keccak-{bits:<3}  rate={rate:>3}B  capacity={capacity:>3}B  "
                    f"empty={keccak_hex(b'', bits)[:32]}...")
