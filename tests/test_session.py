import logging

import pytest

from samesame.memory import SecretBuffer, SecretBufferClosed
from samesame.session import SecretScope, secret_scope


def test_secret_scope_closes_tracked_buffers():
    with SecretScope() as scope:
        sec = scope.copy(b"supersecret")
        assert sec.read() == b"supersecret"
        assert len(scope) == 1
    with pytest.raises(SecretBufferClosed):
        sec.read(1)
    assert len(scope) == 0


def test_secret_scope_copy_text_and_alloc():
    with secret_scope() as scope:
        text = scope.copy("pässword")
        blank = scope.alloc(4)
        assert text.read() == "pässword".encode("utf-8")
        assert blank.read() == b"\x00" * 4
        storage = [text._buf, blank._buf]
    assert text.closed and blank.closed
    assert all(b == 0 for buf in storage for b in buf)


def test_secret_scope_closes_on_exception():
    with pytest.raises(RuntimeError):
        with secret_scope() as scope:
            sec = scope.copy(b"password123")
            storage = sec._buf
            raise RuntimeError("simulated failure")
    assert sec.closed
    assert storage == bytearray(11)


def test_secret_scope_close_failure_is_logged(monkeypatch, caplog):
    def broken_close(self):
        raise OSError("simulated close failure")

    with caplog.at_level(logging.WARNING, logger="samesame.session"):
        with secret_scope() as scope:
            bad = scope.copy(b"a")
            good = scope.copy(b"b")
            monkeypatch.setattr(bad, "close", broken_close.__get__(bad, SecretBuffer))
    assert good.closed
    assert "Failed to close SecretBuffer" in caplog.text
    monkeypatch.undo()
    bad.close()


def test_secret_scope_copy_rejects_other_types():
    with secret_scope() as scope:
        with pytest.raises(TypeError):
            scope.copy(12345)
        assert len(scope) == 0
