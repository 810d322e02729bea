"""Seed coercion shared by the CLI and the HTTP API."""
import hashlib
import random

SEED_MAX = 9223372036854775807


def coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int.

    Digit strings keep their numeric value; any other text is hashed, so
    `"crypt of bones"` names the same dungeon every time. None or blank draws
    a fresh random seed.
    """
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    s = str(payload_seed).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX
