import hashlib

import pytest
from hypothesis import given, strategies as st
from cryptography.exceptions import UnsupportedAlgorithm

import samesame.digest as digest_module
from samesame.digest import HashAlgorithmUnsupported, secure_hash


def test_secure_hash_known_vector():
    assert secure_hash("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert secure_hash("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_secure_hash_is_deterministic():
    password = "TestPassword123!"
    assert secure_hash(password) == secure_hash(password)


def test_secure_hash_format():
    digest = secure_hash("TestPassword123!")
    assert len(digest) == 64
    assert digest == digest.lower()
    int(digest, 16)


def test_secure_hash_distinct_inputs():
    assert secure_hash("Password1") != secure_hash("Password2")


def test_secure_hash_text_is_utf8():
    assert secure_hash("päss") == secure_hash("päss".encode("utf-8"))
    assert secure_hash(bytearray(b"abc")) == secure_hash(memoryview(b"abc"))


def test_secure_hash_rejects_none():
    with pytest.raises(TypeError):
        secure_hash(None)


def test_secure_hash_unsupported_algorithm(monkeypatch):
    def unsupported(algorithm):
        raise UnsupportedAlgorithm("no sha256 here")

    monkeypatch.setattr(digest_module.hashes, "Hash", unsupported)
    with pytest.raises(HashAlgorithmUnsupported):
        secure_hash("anything")


@pytest.mark.fuzz
@given(st.binary())
def test_secure_hash_matches_reference_fuzz(data):
    assert secure_hash(data) == hashlib.sha256(data).hexdigest()


def test_secure_hash_accepts_lone_surrogates():
    text = "pa\ud800ss"
    digest = secure_hash(text)
    assert len(digest) == 64
    assert digest == hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()
    assert digest == secure_hash(text)
