"""
securebase — Live Demo: Keccak Sponge + Keyed Base64
====================================================
Run:  python examples/demo.py

Hashes a message at several output lengths, derives a keyed alphabet,
and round-trips a payload through both text modes.
"""

import sys, os, time
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from securebase import Keccak, SecureBase, Encoding, InvalidDataError, ObjectDisposedError

LINE = "═" * 70
MSG  = "Merhaba Dünya — SecureBase demo."
KEY  = "Gizli Anahtar"

def header(name):
    print(f"\n{LINE}")
    print(f"  {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

# ─────────────────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  securebase — Keccak Sponge + Keyed Base64 Demo")
print(LINE)
print(f"  Message: {MSG}\n")

# ── HASH ─────────────────────────────────────────────────────────────────────
header("HASH — Keccak-f[1600] sponge")
with Keccak() as k:
    for bits in (224, 256, 384, 512):
        t0 = time.perf_counter()
        digest = k.hash(MSG.encode("utf-8"), bits)
        elapsed = time.perf_counter() - t0
        ok(f"{bits}-bit", f"{digest.hex()[:32]}...  ({elapsed*1000:.2f} ms)")
try:
    k.hash(b"", 256)
except ObjectDisposedError as e:
    ok("Disposed session rejected", str(e))

# ── CODEC ────────────────────────────────────────────────────────────────────
for encoding in (Encoding.UTF8, Encoding.UNICODE):
    header(f"CODEC — {encoding.name}")
    plain = SecureBase(encoding)
    keyed = SecureBase(encoding, KEY)
    ok("Standard", plain.encode(MSG))
    ok("Keyed",    keyed.encode(MSG))
    ok("Alphabet", keyed.alphabet)
    ok("Padding",  keyed.padding)
    ok("Decoded",  keyed.decode(keyed.encode(MSG)))
    ok("Wire size", f"{len(keyed.to_wire(keyed.encode(MSG)))} bytes")

header("CODEC — wrong key")
try:
    result = SecureBase(Encoding.UTF8, "wrong").decode(SecureBase(Encoding.UTF8, KEY).encode(MSG))
    ok("Decoded to garbage", repr(result[:20]))
except InvalidDataError as e:
    ok("Rejected", str(e))

print(f"\n{LINE}\n")
