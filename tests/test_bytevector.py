import pytest

from mpnet.bytevector import ByteVector, RawVector


def test_rawvector_fill_and_len():
    vec = RawVector("i", 5, 7)
    assert len(vec) == 5
    assert list(vec) == [7] * 5


def test_rawvector_negative_size():
    with pytest.raises(ValueError):
        RawVector("i", -1)


def test_rawvector_setitem_getitem():
    vec = RawVector("q", 3)
    vec[1] = 42
    vec[-1] = 9
    assert list(vec) == [0, 42, 9]
    assert vec[1] == 42


def test_rawvector_index_out_of_range():
    vec = RawVector("i", 2, 4)
    with pytest.raises(IndexError):
        vec[2]
    with pytest.raises(IndexError):
        vec[-3] = 1
    assert list(vec) == [4, 4]
    assert len(vec) == 2


def test_rawvector_index_type():
    vec = RawVector("i", 2, 6)
    with pytest.raises(TypeError):
        vec["a"]
    assert vec[0] == 6
    assert list(vec) == [6, 6]


def test_resize_shrink_keeps_capacity_and_contents():
    vec = RawVector("i", 4, 5)
    vec.resize(1)
    assert len(vec) == 1
    assert vec.capacity() == 4
    vec.resize(4)
    assert list(vec) == [5] * 4


def test_resize_grow_beyond_capacity():
    vec = RawVector("i", 2, 3)
    vec.resize(5)
    assert len(vec) == 5
    assert vec.capacity() >= 5
    assert list(vec)[:2] == [3, 3]


def test_reserve_does_not_change_size():
    vec = RawVector("i", 2)
    vec.reserve(10)
    assert len(vec) == 2
    assert vec.capacity() == 10
    vec.reserve(3)
    assert vec.capacity() == 10


def test_shrink_to_fit():
    vec = RawVector("i", 6)
    vec.resize(2)
    vec.shrink_to_fit()
    assert vec.capacity() == len(vec) == 2


def test_clear_keeps_capacity():
    vec = RawVector("i", 3)
    vec.clear()
    assert len(vec) == 0
    assert not vec
    assert vec.capacity() == 3


def test_rawvector_equality():
    assert RawVector("i", 3, 1) == RawVector("i", 3, 1)
    assert not RawVector("i", 3, 1) == RawVector("i", 2, 1)
    assert not RawVector("i", 1) == RawVector("q", 1)


def test_tobytes_only_covers_size():
    vec = ByteVector(b"hello")
    vec.resize(2)
    assert vec.tobytes() == b"he"


def test_bytevector_from_bytes_round_trip():
    data = bytes(range(256))
    assert bytes(ByteVector(data)) == data


def test_bytevector_sized():
    vec = ByteVector(4, 0xAB)
    assert bytes(vec) == b"\xab" * 4


def test_push_back_single_and_many():
    vec = ByteVector()
    vec.push_back(1)
    vec.push_back(b"\x02\x03")
    vec.push_back(b"")
    assert bytes(vec) == b"\x01\x02\x03"


def test_push_back_byte_out_of_range():
    vec = ByteVector()
    with pytest.raises(ValueError):
        vec.push_back(256)


def test_pop_back():
    vec = ByteVector(b"abcdef")
    vec.pop_back()
    assert bytes(vec) == b"abcde"
    vec.pop_back(3)
    assert bytes(vec) == b"ab"


def test_pop_back_too_many():
    vec = ByteVector(b"ab")
    with pytest.raises(IndexError):
        vec.pop_back(3)
    empty = ByteVector()
    with pytest.raises(IndexError):
        empty.pop_back()


def test_push_after_pop_overwrites():
    vec = ByteVector(b"abc")
    vec.pop_back(2)
    vec.push_back(b"xy")
    assert bytes(vec) == b"axy"