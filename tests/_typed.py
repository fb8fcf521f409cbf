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
import struct
from typing import Any

import pytest

from bytevector.base import ElementFormatMismatch
from bytevector.base import EmptyVector
from bytevector.base import IndexOutOfBounds
from bytevector.base import InvalidElementSize
from bytevector.base import InvalidHandle
from bytevector.base import InvalidValue
from bytevector.base import VectorError
from bytevector.py import Vector

FORMAT: str = '<i'


class TypedVectorSuite:

    TypedVector: Any = None  # replace by subclassing 'TypedVector'

    def create_scenario(self):
        TypedVector = self.TypedVector
        vector = TypedVector.new(FORMAT)
        vector.push(0)
        vector.push(3)
        vector.insert(1, 1)
        vector.insert(2, 2)
        return vector

    def test___init__(self):
        TypedVector = self.TypedVector
        vector = TypedVector(FORMAT)
        assert vector.format == FORMAT
        assert vector.elem_size == 4
        assert vector.length == 0
        assert vector.capacity == 0
        assert isinstance(vector.untyped, Vector)

    def test___init___invalid(self):
        TypedVector = self.TypedVector
        for format in ('', '<', 'Q!', 'x', '<3x', None):
            with pytest.raises(InvalidElementSize):
                TypedVector(format)

    def test___bytes__(self):
        vector = self.TypedVector.from_values([1, 2], FORMAT)
        assert bytes(vector) == struct.pack('<ii', 1, 2)

    def test___eq__(self):
        TypedVector = self.TypedVector
        vector = TypedVector.from_values([1, 2], FORMAT)
        assert vector == TypedVector.from_values([1, 2], FORMAT)
        assert vector != TypedVector.from_values([1, 2], '<I')
        assert vector == [1, 2]
        assert vector == (1, 2)
        assert vector != [2, 1]
        assert (vector == 'x') is False

    def test___repr__(self):
        vector = self.TypedVector(FORMAT)
        assert repr(vector).startswith(f"<{type(vector).__name__}['<i', len=0]")

    def test___str__(self):
        TypedVector = self.TypedVector
        assert str(TypedVector(FORMAT)) == '[ ]'
        assert str(self.create_scenario()) == '[0, 1, 2, 3]'
        assert str(TypedVector.from_values([(1, 2)], '<hh')) == '[(1, 2)]'

    def test_append(self):
        TypedVector = self.TypedVector
        vector = TypedVector.from_values([1], FORMAT)
        vector.push(4)
        other = self.create_scenario()

        vector.append(other)
        assert vector.to_list() == [1, 4, 0, 1, 2, 3]
        assert other.to_list() == []

    def test_append_invalid(self):
        TypedVector = self.TypedVector
        vector = TypedVector.from_values([1], FORMAT)
        with pytest.raises(ElementFormatMismatch):
            vector.append(TypedVector.from_values([1], '<I'))
        with pytest.raises(InvalidHandle):
            vector.append(Vector(4))
        assert vector.to_list() == [1]

    def test_contains(self):
        vector = self.TypedVector.from_values([1, 4, 0], FORMAT)
        assert vector.contains(1) is True
        assert vector.contains(7) is False
        assert 4 in vector

    def test_copy(self):
        TypedVector = self.TypedVector
        vector = self.create_scenario()
        other = TypedVector('<b')

        vector.copy(other)
        assert other.format == FORMAT
        assert other.to_list() == [0, 1, 2, 3]

        other.mutate(9, 0)
        assert other.to_list() == [9, 1, 2, 3]
        assert vector.to_list() == [0, 1, 2, 3]

        with pytest.raises(InvalidHandle):
            vector.copy([])

    def test_delete_remove(self):
        vector = self.create_scenario()
        assert vector.pop() == 3
        vector.delete(2)
        assert vector.remove(0) == 0
        assert vector.to_list() == [1]

    def test_drop(self):
        vector = self.create_scenario()
        vector.drop()
        with pytest.raises(InvalidHandle):
            vector.push(1)

        assert repr(vector).startswith(f"<{type(vector).__name__}['<i', len=0]")
        assert str(vector) == '[ ]'
        assert (vector == [0, 1, 2, 3]) is False
        assert vector != self.create_scenario()

    def test_from_raw_parts(self):
        TypedVector = self.TypedVector
        raw = bytearray(struct.pack('<iii', 7, 8, 9))
        vector = TypedVector.from_raw_parts(raw, 3, FORMAT)
        assert vector.to_list() == [7, 8, 9]
        assert vector.untyped.buffer is raw

        items = array.array('d', [0.5, 1.5])
        vector = TypedVector.from_raw_parts(items, 2, 'd')
        vector.reverse()
        assert list(items) == [1.5, 0.5]

    def test_from_values(self):
        TypedVector = self.TypedVector
        vector = TypedVector.from_values(range(5), FORMAT)
        assert vector.to_list() == [0, 1, 2, 3, 4]
        assert vector.capacity == 5

        vector = TypedVector.from_values([], FORMAT)
        assert vector.capacity == 0
        assert vector.untyped.buffer is None

    def test_inner_copy(self):
        TypedVector = self.TypedVector
        vector = self.create_scenario()
        other = TypedVector(FORMAT)
        vector.inner_copy(other, 1, 3)
        assert other.to_list() == [1, 2]

        with pytest.raises(IndexOutOfBounds):
            vector.inner_copy(other, 0, 5)

    def test_insert(self):
        vector = self.create_scenario()
        assert vector.to_list() == [0, 1, 2, 3]
        assert vector.length == 4

        with pytest.raises(IndexOutOfBounds):
            vector.insert(9, 6)
        with pytest.raises(InvalidValue):
            vector.insert(1 << 40, 0)
        assert vector.to_list() == [0, 1, 2, 3]

    def test_invalid_value(self):
        TypedVector = self.TypedVector
        vector = TypedVector.from_values([1, 2], '<b')
        with pytest.raises(InvalidValue):
            vector.push(1000)
        with pytest.raises(VectorError):
            vector.insert('x', 0)
        with pytest.raises(ValueError):
            vector.mutate(None, 1)
        assert vector.to_list() == [1, 2]

        points = TypedVector('<hh')
        with pytest.raises(InvalidValue):
            points.push(1)
        with pytest.raises(InvalidValue):
            points.push((1,))
        assert points.length == 0

        with pytest.raises(InvalidValue):
            TypedVector.from_values([1, 1000], '<b')
        with pytest.raises(InvalidValue):
            TypedVector.with_value(-129, 3, '<b')

    def test_is_empty(self):
        TypedVector = self.TypedVector
        assert TypedVector(FORMAT).is_empty() is True
        assert bool(TypedVector(FORMAT)) is False
        assert TypedVector.from_values([0], FORMAT).is_empty() is False
        assert len(TypedVector.from_values([0, 0], FORMAT)) == 2

    def test_multi_field(self):
        TypedVector = self.TypedVector
        points = TypedVector('<hh')
        points.push((1, 2))
        points.push((3, 4))
        assert points.peek(1) == (3, 4)
        assert points.search((3, 4)) == 1
        assert points.swap_remove(0) == (1, 2)
        assert points.to_list() == [(3, 4)]

    def test_peek(self):
        vector = self.create_scenario()
        assert [vector.peek(i) for i in range(4)] == [0, 1, 2, 3]
        with pytest.raises(IndexOutOfBounds):
            vector.peek(4)

    def test_pop_empty(self):
        with pytest.raises(EmptyVector):
            self.TypedVector(FORMAT).pop()

    def test_capacity_ops(self):
        TypedVector = self.TypedVector
        vector = TypedVector.with_capacity(4, FORMAT)
        assert vector.capacity == 4
        vector.push(1)
        vector.reserve(2)
        assert vector.capacity == 6
        vector.resize(10)
        assert vector.capacity == 10
        vector.shrink_to_fit()
        assert vector.capacity == 1
        vector.push(2)
        vector.push(3)
        vector.truncate(2)
        assert vector.to_list() == [1, 2]
        vector.clear()
        assert vector.capacity == 0

    def test_search(self):
        vector = self.TypedVector.from_values([1, 4, 0], FORMAT)
        assert vector.search(4) == 1
        assert vector.search(7) is None

    def test_split_at(self):
        TypedVector = self.TypedVector
        vector = TypedVector.from_values([1, 4, 0, 1, 2, 3], FORMAT)
        other = TypedVector(FORMAT)
        vector.split_at(other, 3)
        assert vector.to_list() == [1, 4, 0]
        assert other.to_list() == [1, 2, 3]

        vector.swap(0, 2)
        assert vector.to_list() == [0, 4, 1]
        vector.reverse()
        assert vector.to_list() == [1, 4, 0]

        with pytest.raises(ElementFormatMismatch):
            vector.split_at(TypedVector('<q'), 1)

    def test_swap_delete(self):
        vector = self.TypedVector.from_values([0, 1, 2, 3], FORMAT)
        vector.swap_delete(0)
        assert vector.to_list() == [3, 1, 2]

    def test_with_value(self):
        TypedVector = self.TypedVector
        vector = TypedVector.with_value(3, 5, FORMAT)
        assert vector.to_list() == [3, 3, 3, 3, 3]
        assert str(vector) == '[3, 3, 3, 3, 3]'
