"""Tests for content fingerprints."""

import hashlib
import random

import pytest

from svcs.core.errors import StorageFailure
from svcs.core.fingerprint import fingerprint_bytes, fingerprint_files
from svcs.core.storage import MemoryStorage


def test_matches_sha256_of_concatenation():
    fp = fingerprint_bytes([b"hello", b" ", b"world"])

    assert int(fp, 16) == int(hashlib.sha256(b"hello world").hexdigest(), 16)
    assert 32 <= len(fp) <= 64
    assert fp == fp.lower()


def test_known_value():
    assert fingerprint_bytes([b"hello"]) == (
        "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
    )


def test_canonical_width_is_full_digest():
    data = b"some content"
    fp = fingerprint_bytes([data], width=64)

    assert fp == hashlib.sha256(data).hexdigest()


def test_deterministic():
    chunks = [b"alpha", b"beta", b"\x00\xff"]

    assert fingerprint_bytes(chunks) == fingerprint_bytes(list(chunks))


def test_no_delimiters_between_files():
    assert fingerprint_bytes([b"ab", b"c"]) == fingerprint_bytes([b"a", b"bc"])


def test_order_matters():
    assert fingerprint_bytes([b"hello", b"world"]) != fingerprint_bytes([b"world", b"hello"])


@pytest.mark.parametrize("seed", range(20))
def test_single_byte_change_changes_fingerprint(seed):
    rng = random.Random(seed)
    files = [bytes(rng.randrange(256) for _ in range(rng.randrange(1, 64))) for _ in range(3)]
    original = fingerprint_bytes(files)

    target = rng.randrange(len(files))
    content = bytearray(files[target])
    pos = rng.randrange(len(content))
    content[pos] = (content[pos] + rng.randrange(1, 256)) % 256
    mutated = list(files)
    mutated[target] = bytes(content)

    assert fingerprint_bytes(mutated) != original


def test_fingerprint_files_reads_working_copies():
    storage = MemoryStorage(working={"a.txt": b"hello", "b.txt": b"world"})

    assert fingerprint_files(storage, ["a.txt", "b.txt"]) == fingerprint_bytes([b"hello", b"world"])


def test_fingerprint_files_missing_file():
    storage = MemoryStorage(working={"a.txt": b"hello"})

    with pytest.raises(StorageFailure):
        fingerprint_files(storage, ["a.txt", "gone.txt"])
