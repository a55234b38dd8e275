import pytest
from hypothesis import given, strategies as st

from samesame.utils import constant_time_equals, scrub
from samesame.memory import SecretBuffer


def test_constant_time_equals_equal():
    a = b"secret123"
    b_ = b"secret123"
    assert constant_time_equals(a, b_) is True


def test_constant_time_equals_unequal():
    a = b"secret123"
    b_ = b"Secret123"
    assert constant_time_equals(a, b_) is False


def test_constant_time_equals_different_lengths():
    assert constant_time_equals(b"secret", b"secret123") is False
    assert constant_time_equals(b"secret123", b"secret") is False


def test_constant_time_equals_prefix_of_longer_input():
    # the shorter side matching every byte it has must not be enough
    assert constant_time_equals(b"", b"\x00") is False
    assert constant_time_equals(b"\x00\x00", b"\x00") is False


def test_constant_time_equals_empty():
    assert constant_time_equals(b"", b"") is True


def test_constant_time_equals_mixed_buffer_types():
    data = bytearray(b"abc")
    assert constant_time_equals(memoryview(data), b"abc") is True
    assert constant_time_equals(data, memoryview(b"abd")) is False


def test_constant_time_equals_rejects_none():
    with pytest.raises(TypeError):
        constant_time_equals(None, b"x")
    with pytest.raises(TypeError):
        constant_time_equals(b"x", None)


def test_constant_time_equals_releases_first_input_on_rejection():
    data = bytearray(b"secret")
    with pytest.raises(TypeError) as excinfo:
        constant_time_equals(data, None)
    # excinfo keeps the failing frame alive; the export must already be gone
    assert excinfo.value is not None
    data.extend(b"!")
    assert data == b"secret!"


def test_constant_time_equals_rejects_str():
    with pytest.raises(TypeError):
        constant_time_equals("abc", b"abc")


def test_scrub_bytearray():
    data = bytearray(b"temporary")
    scrub(data)
    assert data == b"\x00" * len(data)


def test_scrub_memoryview():
    buf = bytearray(b"data")
    mv = memoryview(buf)
    scrub(mv)
    assert buf == b"\x00" * len(buf)


def test_scrub_memoryview_slice_leaves_rest():
    buf = bytearray(b"keep-wipe")
    scrub(memoryview(buf)[5:])
    assert buf == b"keep-\x00\x00\x00\x00"


def test_scrub_strided_memoryview():
    buf = bytearray(b"abcdef")
    scrub(memoryview(buf)[::2])
    assert buf == b"\x00b\x00d\x00f"


def test_scrub_secret_buffer():
    s = SecretBuffer.from_bytes(b"hunter2")
    try:
        scrub(s)
        assert s.read() == b"\x00" * 7
    finally:
        s.close()


def test_scrub_empty_and_idempotent():
    empty = bytearray()
    scrub(empty)
    assert empty == b""

    data = bytearray(b"xy")
    scrub(data)
    scrub(data)
    assert data == b"\x00\x00"


def test_scrub_invalid_type():
    with pytest.raises(TypeError):
        scrub(b"bytes")  # immutable bytes should raise
    with pytest.raises(TypeError):
        scrub("text")


def test_scrub_readonly_memoryview():
    with pytest.raises(TypeError):
        scrub(memoryview(bytearray(b"abc")).toreadonly())


# ---------------------------------------------------------------------------
# Hypothesis fuzz tests
# ---------------------------------------------------------------------------

@pytest.mark.fuzz
@given(st.binary(), st.binary())
def test_constant_time_equals_fuzz(a, b):
    expected = (a == b)
    assert constant_time_equals(a, b) == expected


@pytest.mark.fuzz
@given(st.binary())
def test_constant_time_equals_reflexive_fuzz(a):
    assert constant_time_equals(a, bytes(a)) is True


@pytest.mark.fuzz
@given(st.binary(max_size=1024))
def test_scrub_fuzz(data):
    buf = bytearray(data)
    scrub(buf)
    assert len(buf) == len(data)
    assert all(b == 0 for b in buf)
