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

r"""Pure Python implementation."""

import logging
import operator
from typing import Any
from typing import NoReturn
from typing import Optional
from typing import TypeVar

from . import buffers as _buffers
from .base import GROWTH_FACTOR
from .base import GROWTH_STEP_MAX
from .base import BaseVector
from .base import Buffer
from .base import BytesLike
from .base import ElementSizeMismatch
from .base import EmptyVector
from .base import IndexOutOfBounds
from .base import InvalidElementSize
from .base import InvalidHandle
from .base import OverlappingBuffers
from .base import WouldTruncate

_logger = logging.getLogger(__name__)

_VectorSelf = TypeVar('_VectorSelf', bound='Vector')


def _check_count(
    count: int,
) -> int:

    count = operator.index(count)
    if count < 0:
        raise ValueError(f'negative count: {count}')
    return count


def _check_elem_size(
    elem_size: int,
) -> int:

    try:
        size = operator.index(elem_size)
    except TypeError:
        size = 0

    if size <= 0:
        _logger.error('element size of a vector must be positive, got %r', elem_size)
        raise InvalidElementSize('element size must be positive')
    return size


def _raise_out_of_bounds(
    length: int,
    *indices: int,
) -> NoReturn:

    message = f'index out of bounds, `len` is {length} but `index` is {", ".join(map(str, indices))}'
    _logger.error('%s', message)
    raise IndexOutOfBounds(message)


def drop_many(
    *vectors: 'Vector',
) -> None:
    r"""Drops many vectors, in order.

    Arguments:
        vectors (:obj:`Vector`):
            Vectors to drop, each exactly once.

    See Also:
        :meth:`Vector.drop`
    """

    for vector in vectors:
        vector.drop()


class Vector(BaseVector):
    __doc__ = BaseVector.__doc__

    GROWTH_FACTOR: float = GROWTH_FACTOR
    GROWTH_STEP_MAX: int = GROWTH_STEP_MAX

    def __bool__(
        self,
    ) -> bool:

        self._check_alive()
        return self._length > 0

    def __bytes__(
        self,
    ) -> bytes:

        self._check_alive()
        if self._buffer is None:
            return b''
        return bytes(self._buffer[:(self._length * self._elem_size)])

    def __contains__(
        self,
        value: BytesLike,
    ) -> bool:

        return self.contains(value)

    def __eq__(
        self,
        other: Any,
    ) -> bool:

        if not self._alive:
            return self is other

        if isinstance(other, Vector):
            if not other._alive:
                return False
            if self._elem_size != other._elem_size:
                return False
            return bytes(self) == bytes(other)

        try:
            view = memoryview(other)
        except TypeError:
            return NotImplemented

        with view:
            return bytes(self) == view.tobytes()

    __hash__ = None  # mutable

    def __init__(
        self,
        elem_size: int,
    ):

        self._elem_size: int = _check_elem_size(elem_size)
        self._length: int = 0
        self._capacity: int = 0
        self._buffer: Optional[Buffer] = None
        self._alive: bool = True

    def __len__(
        self,
    ) -> int:

        self._check_alive()
        return self._length

    def __repr__(
        self,
    ) -> str:

        return (f'<{self.__class__.__name__}[len={self._length}, cap={self._capacity}, '
                f'elem={self._elem_size}]@0x{id(self):X}>')

    def __sizeof__(
        self,
    ) -> int:

        size = super().__sizeof__()
        if self._buffer is not None:
            size += self._buffer.__sizeof__()
        return size

    def __str__(
        self,
    ) -> str:

        if not self._length:
            return '[ ]'
        return '[' + ', '.join(self._format_item(i) for i in range(self._length)) + ']'

    def _check_alive(
        self,
    ) -> None:

        if not self._alive:
            raise InvalidHandle('vector already dropped')

    def _check_index(
        self,
        index: int,
        endex: int,
    ) -> int:

        index = operator.index(index)
        if not 0 <= index < endex:
            _raise_out_of_bounds(self._length, index)
        return index

    def _check_other(
        self,
        other: Any,
    ) -> 'Vector':

        if other is None:
            raise InvalidHandle('missing vector')
        if not isinstance(other, Vector):
            raise InvalidHandle(f'not a vector: {type(other).__name__}')
        other._check_alive()
        return other

    def _check_peer(
        self,
        other: Any,
    ) -> 'Vector':

        other = self._check_other(other)
        if other is self:
            raise OverlappingBuffers('source and target are the same vector')
        if other._elem_size != self._elem_size:
            raise ElementSizeMismatch(f'element sizes differ: {self._elem_size} != {other._elem_size}')
        return other

    def _format_item(
        self,
        index: int,
    ) -> str:

        offset = index * self._elem_size
        return bytes(self._buffer[offset:(offset + self._elem_size)]).hex()

    def _grow(
        self,
    ) -> None:

        if self._buffer is None:
            self._buffer = _buffers.allocate(1, self._elem_size)
            self._capacity = 1

        elif self._length == self._capacity:
            self.reserve(self._growth_step())

    def _growth_step(
        self,
    ) -> int:

        step = int(self._capacity * (self.GROWTH_FACTOR - 1))
        step_max = self.GROWTH_STEP_MAX // self._elem_size
        return max(1, min(step, step_max))

    def _read(
        self,
        index: int,
    ) -> bytes:

        offset = index * self._elem_size
        return bytes(self._buffer[offset:(offset + self._elem_size)])

    def _write(
        self,
        value: bytes,
        index: int,
    ) -> None:

        offset = index * self._elem_size
        self._buffer[offset:(offset + self._elem_size)] = value

    def append(
        self,
        other: 'Vector',
    ) -> None:

        self._check_alive()
        other = self._check_peer(other)
        count = other._length
        elem_size = self._elem_size

        if count:
            if self._buffer is None:
                self._buffer = _buffers.allocate(count, elem_size)
                self._capacity = count

            elif self._length + count > self._capacity:
                self.reserve(count)

            _buffers.copy(self._buffer, self._length * elem_size, other._buffer, 0, count * elem_size)
            self._length += count

        other.clear()

    @property
    def buffer(
        self,
    ) -> Optional[Buffer]:

        return self._buffer

    @property
    def capacity(
        self,
    ) -> int:

        return self._capacity

    def clear(
        self,
    ) -> None:

        self._check_alive()
        self._buffer = None
        self._length = 0
        self._capacity = 0

    def contains(
        self,
        value: BytesLike,
    ) -> bool:

        return self.search(value) is not None

    def copy(
        self,
        other: 'Vector',
    ) -> None:

        self._check_alive()
        other = self._check_other(other)
        elem_size = self._elem_size
        buffer = _buffers.reallocate(self._buffer, self._length * elem_size, other._capacity,
                                     self._capacity, elem_size)

        other._buffer = buffer
        other._length = self._length
        other._capacity = self._capacity
        other._elem_size = elem_size

    def delete(
        self,
        index: int,
    ) -> None:

        self._check_alive()
        index = self._check_index(index, self._length)
        elem_size = self._elem_size
        offset = index * elem_size
        size = (self._length - index - 1) * elem_size

        _buffers.move(self._buffer, offset, offset + elem_size, size)
        self._length -= 1

    def drop(
        self,
    ) -> None:

        self._check_alive()
        self._buffer = None
        self._length = 0
        self._capacity = 0
        self._alive = False

    @property
    def elem_size(
        self,
    ) -> int:

        return self._elem_size

    @classmethod
    def from_raw_parts(
        cls,
        raw: Any,
        length: int,
        elem_size: int,
    ) -> _VectorSelf:

        vector = cls(elem_size)
        length = _check_count(length)
        buffer = _buffers.adopt(raw, length * vector._elem_size)

        if length:
            vector._buffer = buffer
            vector._length = length
            vector._capacity = length
        return vector

    def inner_copy(
        self,
        other: 'Vector',
        start: int,
        end: int,
    ) -> None:

        self._check_alive()
        other = self._check_other(other)
        end = self._check_index(end, self._length + 1)
        start = self._check_index(start, end + 1)
        elem_size = self._elem_size
        count = end - start

        buffer = _buffers.allocate(count, elem_size)
        if buffer is not None:
            _buffers.copy(buffer, 0, self._buffer, start * elem_size, count * elem_size)

        other._buffer = buffer
        other._length = count
        other._capacity = count
        other._elem_size = elem_size

    def insert(
        self,
        value: BytesLike,
        index: int,
    ) -> None:

        self._check_alive()
        index = self._check_index(index, self._length + 1)
        value = _buffers.as_element(value, self._elem_size)
        self._grow()

        elem_size = self._elem_size
        offset = index * elem_size
        size = (self._length - index) * elem_size
        _buffers.move(self._buffer, offset + elem_size, offset, size)
        self._write(value, index)
        self._length += 1

    def is_empty(
        self,
    ) -> bool:

        self._check_alive()
        return not self._length

    @property
    def length(
        self,
    ) -> int:

        return self._length

    def mutate(
        self,
        value: BytesLike,
        index: int,
    ) -> None:

        self._check_alive()
        index = self._check_index(index, self._length)
        self._write(_buffers.as_element(value, self._elem_size), index)

    def peek(
        self,
        index: int,
    ) -> Optional[memoryview]:

        self._check_alive()
        index = self._check_index(index, self._length)
        if self._buffer is None:
            return None

        offset = index * self._elem_size
        return memoryview(self._buffer)[offset:(offset + self._elem_size)].toreadonly()

    def pop(
        self,
    ) -> bytes:

        self._check_alive()
        if not self._length:
            raise EmptyVector('pop from empty vector')

        value = self._read(self._length - 1)
        self._length -= 1
        return value

    def push(
        self,
        value: BytesLike,
    ) -> None:

        self._check_alive()
        value = _buffers.as_element(value, self._elem_size)
        self._grow()
        self._write(value, self._length)
        self._length += 1

    def remove(
        self,
        index: int,
    ) -> bytes:

        self._check_alive()
        index = self._check_index(index, self._length)
        value = self._read(index)
        self.delete(index)
        return value

    def reserve(
        self,
        additional: int,
    ) -> None:

        self._check_alive()
        additional = _check_count(additional)

        if additional:
            capacity = self._capacity + additional
            elem_size = self._elem_size
            self._buffer = _buffers.reallocate(self._buffer, self._length * elem_size, self._capacity,
                                               capacity, elem_size)
            self._capacity = capacity

    def resize(
        self,
        new_capacity: int,
    ) -> None:

        self._check_alive()
        new_capacity = _check_count(new_capacity)

        if self._length > new_capacity:
            raise WouldTruncate(f'length {self._length} exceeds capacity {new_capacity}; truncate first')

        if new_capacity > self._capacity:
            self.reserve(new_capacity - self._capacity)

    def reverse(
        self,
    ) -> None:

        self._check_alive()
        length = self._length
        elem_size = self._elem_size

        for index in range(length // 2):
            _buffers.swap(self._buffer, index * elem_size, (length - index - 1) * elem_size, elem_size)

    def search(
        self,
        value: BytesLike,
    ) -> Optional[int]:

        self._check_alive()
        elem_size = self._elem_size
        value = _buffers.as_element(value, elem_size)
        buffer = self._buffer

        for index in range(self._length):
            offset = index * elem_size
            if buffer[offset:(offset + elem_size)] == value:
                return index
        return None

    def shrink_to_fit(
        self,
    ) -> None:

        self._check_alive()
        length = self._length
        elem_size = self._elem_size
        self._buffer = _buffers.reallocate(self._buffer, length * elem_size, self._capacity,
                                           length, elem_size)
        self._capacity = length

    def split_at(
        self,
        other: 'Vector',
        index: int,
    ) -> None:

        self._check_alive()
        other = self._check_peer(other)
        index = self._check_index(index, self._length + 1)
        elem_size = self._elem_size
        count = self._length - index

        buffer = _buffers.allocate(count, elem_size)
        if buffer is not None:
            _buffers.copy(buffer, 0, self._buffer, index * elem_size, count * elem_size)

        other._buffer = buffer
        other._length = count
        other._capacity = count
        self._length = index

    def swap(
        self,
        index1: int,
        index2: int,
    ) -> None:

        self._check_alive()
        length = self._length
        index1 = operator.index(index1)
        index2 = operator.index(index2)
        if not (0 <= index1 < length and 0 <= index2 < length):
            _raise_out_of_bounds(length, index1, index2)

        elem_size = self._elem_size
        _buffers.swap(self._buffer, index1 * elem_size, index2 * elem_size, elem_size)

    def swap_delete(
        self,
        index: int,
    ) -> None:

        self._check_alive()
        index = self._check_index(index, self._length)
        last = self._length - 1

        if index != last:
            elem_size = self._elem_size
            _buffers.move(self._buffer, index * elem_size, last * elem_size, elem_size)
        self._length = last

    def swap_remove(
        self,
        index: int,
    ) -> bytes:

        self._check_alive()
        index = self._check_index(index, self._length)
        value = self._read(index)
        self.swap_delete(index)
        return value

    def truncate(
        self,
        new_length: int,
    ) -> None:

        self._check_alive()
        new_length = _check_count(new_length)

        if not new_length:
            self.clear()

        elif new_length < self._length:
            elem_size = self._elem_size
            self._buffer = _buffers.reallocate(self._buffer, new_length * elem_size, self._capacity,
                                               new_length, elem_size)
            self._length = new_length
            self._capacity = new_length

    @classmethod
    def with_capacity(
        cls,
        capacity: int,
        elem_size: int,
    ) -> _VectorSelf:

        vector = cls(elem_size)
        vector.reserve(capacity)
        return vector

    @classmethod
    def with_value(
        cls,
        value: BytesLike,
        length: int,
        elem_size: int,
    ) -> _VectorSelf:

        vector = cls(elem_size)
        length = _check_count(length)
        value = _buffers.as_element(value, vector._elem_size)

        if length:
            vector._buffer = _buffers.fill(value, length)
            vector._length = length
            vector._capacity = length
        return vector
