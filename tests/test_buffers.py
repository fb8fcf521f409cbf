# Copyright (c) 2020-2023, Andrea Zoppi.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice,
#    this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

import array
import logging

import pytest

from bytevector import buffers
from bytevector.base import AllocationFailed
from bytevector.base import ElementSizeMismatch
from bytevector.base import InvalidBuffer


@pytest.fixture
def hexstr():
    return bytearray(b'0123456789ABCDEF')


@pytest.fixture
def hexview(hexstr):
    return memoryview(hexstr)


def test_adopt(hexstr):
    assert buffers.adopt(hexstr, 16) is hexstr
    assert buffers.adopt(hexstr, 0) is hexstr

    items = array.array('H', [1, 2, 3])
    view = buffers.adopt(items, 6)
    assert isinstance(view, memoryview)
    assert view.format == 'B'
    assert len(view) == 6

    view[0:2] = b'\0\0'
    assert items[0] == 0


def test_adopt_invalid(hexstr, hexview):
    with pytest.raises(InvalidBuffer, match='missing'):
        buffers.adopt(None, 0)
    with pytest.raises(InvalidBuffer, match='too small'):
        buffers.adopt(hexstr, 17)
    with pytest.raises(InvalidBuffer, match='read-only'):
        buffers.adopt(hexview.toreadonly(), 1)
    with pytest.raises(InvalidBuffer, match='non-contiguous'):
        buffers.adopt(hexview[::2], 1)
    with pytest.raises(InvalidBuffer, match='buffer protocol'):
        buffers.adopt(object(), 1)


def test_allocate():
    assert buffers.allocate(0, 4) is None
    buffer = buffers.allocate(3, 4)
    assert buffer == bytearray(12)

    with pytest.raises(AllocationFailed):
        buffers.allocate(1 << 62, 1 << 8)


def test_as_element(hexstr, hexview):
    assert buffers.as_element(hexstr[:4], 4) == b'0123'
    assert buffers.as_element(hexview[4:8], 4) == b'4567'
    assert buffers.as_element(array.array('B', b'ab'), 2) == b'ab'

    with pytest.raises(ElementSizeMismatch):
        buffers.as_element(b'abc', 2)
    with pytest.raises(InvalidBuffer):
        buffers.as_element(None, 2)
    with pytest.raises(InvalidBuffer):
        buffers.as_element('ab', 2)


def test_copy(hexstr):
    target = bytearray(8)
    buffers.copy(target, 2, hexstr, 10, 4)
    assert target == b'\0\0ABCD\0\0'

    buffers.copy(target, 0, hexstr, 0, 0)
    assert target == b'\0\0ABCD\0\0'


def test_fill():
    assert buffers.fill(b'ab', 0) is None
    assert buffers.fill(b'ab', 3) == b'ababab'

    with pytest.raises(AllocationFailed):
        buffers.fill(b'ab', 1 << 62)


def test_move_right(hexstr):
    buffers.move(hexstr, 2, 0, 6)
    assert hexstr == b'0101234589ABCDEF'


def test_move_left(hexstr):
    buffers.move(hexstr, 0, 2, 6)
    assert hexstr == b'2345676789ABCDEF'


def test_move_view(hexstr, hexview):
    buffers.move(hexview, 1, 0, 4)
    assert hexstr == b'0012356789ABCDEF'


def test_move_noop(hexstr):
    buffers.move(hexstr, 3, 3, 4)
    buffers.move(hexstr, 0, 4, 0)
    assert hexstr == b'0123456789ABCDEF'


def test_reallocate(hexstr, caplog):
    with caplog.at_level(logging.DEBUG, logger='bytevector'):
        buffer = buffers.reallocate(hexstr, 6, 4, 3, 4)
    assert 'reallocating 4 -> 3 slots of 4 bytes' in caplog.text
    assert buffer is not hexstr
    assert buffer == b'012345\0\0\0\0\0\0'
    assert hexstr == b'0123456789ABCDEF'

    assert buffers.reallocate(hexstr, 0, 4, 0, 4) is None
    assert buffers.reallocate(None, 0, 0, 2, 4) == bytearray(8)


def test_reallocate_owned_count(hexstr, caplog):
    with caplog.at_level(logging.DEBUG, logger='bytevector'):
        buffer = buffers.reallocate(hexstr, 4, 1, 2, 4)
    assert 'reallocating 1 -> 2 slots of 4 bytes' in caplog.text
    assert buffer == b'0123\0\0\0\0'


def test_reallocate_failed(hexstr):
    with pytest.raises(AllocationFailed):
        buffers.reallocate(hexstr, 16, 4, 1 << 62, 1 << 8)
    assert hexstr == b'0123456789ABCDEF'


def test_swap(hexstr, hexview):
    buffers.swap(hexstr, 0, 12, 4)
    assert hexstr == b'CDEF456789AB0123'

    buffers.swap(hexview, 4, 4, 4)
    buffers.swap(hexview, 4, 8, 4)
    assert hexstr == b'CDEF89AB45670123'
