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

r"""Typed vectors.

A :obj:`TypedVector` stores values packed by a :mod:`struct` format, on top
of a type-erased :obj:`bytevector.py.Vector`, so that element sizes are
derived from the format instead of being passed around.

Examples:
    >>> from bytevector import TypedVector
    >>> vector = TypedVector('<i')
    >>> vector.push(0)
    >>> vector.push(3)
    >>> vector.insert(1, 1)
    >>> vector.insert(2, 2)
    >>> str(vector)
    '[0, 1, 2, 3]'
    >>> vector.untyped.elem_size
    4
    >>> bytes(vector.untyped)[:8]
    b'\x00\x00\x00\x00\x01\x00\x00\x00'
"""

import struct
from typing import Any
from typing import Iterable
from typing import List
from typing import Optional
from typing import Type
from typing import TypeVar

from .base import ElementFormatMismatch
from .base import InvalidElementSize
from .base import InvalidHandle
from .base import InvalidValue
from .py import Vector

_TypedVectorSelf = TypeVar('_TypedVectorSelf', bound='TypedVector')


class TypedVector:
    r"""Contiguous growable array of typed values.

    Values are packed into a :obj:`bytevector.py.Vector` according to a
    :mod:`struct` format, which must describe a non-empty fixed-size item.
    Formats made of a single field hold plain values; formats made of more
    fields hold tuples.

    All the operations of :obj:`bytevector.base.BaseVector` are available,
    with values in place of raw bytes.

    Arguments:
        format (str):
            :mod:`struct` format of each value.

    Raises:
        InvalidElementSize: `format` is invalid, or has no size or fields.

    Examples:
        >>> from bytevector import TypedVector
        >>> points = TypedVector('<hh')
        >>> points.push((1, 2))
        >>> points.push((3, 4))
        >>> points.pop()
        (3, 4)
        >>> points.to_list()
        [(1, 2)]
    """

    _Vector: Type[Vector] = Vector

    def __bool__(
        self,
    ) -> bool:

        return self._impl.__bool__()

    def __bytes__(
        self,
    ) -> bytes:

        return self._impl.__bytes__()

    def __contains__(
        self,
        value: Any,
    ) -> bool:

        return self.contains(value)

    def __eq__(
        self,
        other: Any,
    ) -> bool:

        if isinstance(other, TypedVector):
            return self.format == other.format and self._impl == other._impl

        if isinstance(other, (list, tuple)):
            if not self._impl._alive:
                return False
            return self.to_list() == list(other)

        return NotImplemented

    __hash__ = None  # mutable

    def __init__(
        self,
        format: str,
    ):

        self._struct: struct.Struct = self._make_struct(format)
        self._single: bool = len(self._struct.unpack(bytes(self._struct.size))) == 1
        self._impl: Vector = self._Vector(self._struct.size)

    def __len__(
        self,
    ) -> int:

        return self._impl.__len__()

    def __repr__(
        self,
    ) -> str:

        return f'<{self.__class__.__name__}[{self.format!r}, len={self._impl._length}]@0x{id(self):X}>'

    def __sizeof__(
        self,
    ) -> int:

        return super().__sizeof__() + self._impl.__sizeof__()  # approximate

    def __str__(
        self,
    ) -> str:

        if not self._impl._length:
            return '[ ]'
        return '[' + ', '.join(map(str, self.to_list())) + ']'

    def _check_peer(
        self,
        other: Any,
    ) -> 'TypedVector':

        if not isinstance(other, TypedVector):
            raise InvalidHandle(f'not a typed vector: {type(other).__name__}')
        if other.format != self.format:
            raise ElementFormatMismatch(f'formats differ: {self.format!r} != {other.format!r}')
        return other

    @staticmethod
    def _make_struct(
        format: str,
    ) -> struct.Struct:

        try:
            packer = struct.Struct(format)
        except (struct.error, TypeError) as exc:
            raise InvalidElementSize(f'invalid format: {format!r}') from exc

        if not packer.size:
            raise InvalidElementSize(f'format has no size: {format!r}')
        if not packer.unpack(bytes(packer.size)):
            raise InvalidElementSize(f'format has no fields: {format!r}')
        return packer

    def _pack(
        self,
        value: Any,
    ) -> bytes:

        try:
            if self._single:
                return self._struct.pack(value)
            else:
                return self._struct.pack(*value)
        except (struct.error, TypeError) as exc:
            raise InvalidValue(f'cannot pack {value!r} as {self.format!r}') from exc

    def _unpack(
        self,
        data: Any,
    ) -> Any:

        item = self._struct.unpack(data)
        return item[0] if self._single else item

    @classmethod
    def _wrap_impl(
        cls,
        format: str,
        impl: Vector,
    ) -> _TypedVectorSelf:

        vector = cls(format)
        vector._impl = impl
        return vector

    def append(
        self,
        other: 'TypedVector',
    ) -> None:

        self._impl.append(self._check_peer(other)._impl)

    @property
    def capacity(
        self,
    ) -> int:

        return self._impl.capacity

    def clear(
        self,
    ) -> None:

        self._impl.clear()

    def contains(
        self,
        value: Any,
    ) -> bool:

        return self._impl.contains(self._pack(value))

    def copy(
        self,
        other: 'TypedVector',
    ) -> None:

        if not isinstance(other, TypedVector):
            raise InvalidHandle(f'not a typed vector: {type(other).__name__}')
        self._impl.copy(other._impl)
        other._struct = self._struct
        other._single = self._single

    def delete(
        self,
        index: int,
    ) -> None:

        self._impl.delete(index)

    def drop(
        self,
    ) -> None:

        self._impl.drop()

    @property
    def elem_size(
        self,
    ) -> int:

        return self._impl.elem_size

    @property
    def format(
        self,
    ) -> str:
        r"""str: :mod:`struct` format of the values."""

        return self._struct.format

    @classmethod
    def from_raw_parts(
        cls,
        raw: Any,
        length: int,
        format: str,
    ) -> _TypedVectorSelf:

        size = cls._make_struct(format).size
        return cls._wrap_impl(format, cls._Vector.from_raw_parts(raw, length, size))

    @classmethod
    def from_values(
        cls,
        values: Iterable[Any],
        format: str,
    ) -> _TypedVectorSelf:
        r"""Creates a vector holding the given values.

        Arguments:
            values (iterable):
                Values to pack, in order.

            format (str):
                :mod:`struct` format of each value.

        Returns:
            :obj:`TypedVector`: Vector with capacity equal to its length.

        Examples:
            >>> from bytevector import TypedVector
            >>> vector = TypedVector.from_values([1, 4, 0], 'b')
            >>> vector.search(4)
            1
            >>> vector.capacity
            3
        """

        vector = cls(format)
        pack = vector._pack
        raw = bytearray().join(pack(value) for value in values)
        length = len(raw) // vector._struct.size
        vector._impl = cls._Vector.from_raw_parts(raw, length, vector._struct.size)
        return vector

    def inner_copy(
        self,
        other: 'TypedVector',
        start: int,
        end: int,
    ) -> None:

        if not isinstance(other, TypedVector):
            raise InvalidHandle(f'not a typed vector: {type(other).__name__}')
        self._impl.inner_copy(other._impl, start, end)
        other._struct = self._struct
        other._single = self._single

    def insert(
        self,
        value: Any,
        index: int,
    ) -> None:

        self._impl.insert(self._pack(value), index)

    def is_empty(
        self,
    ) -> bool:

        return self._impl.is_empty()

    @property
    def length(
        self,
    ) -> int:

        return self._impl.length

    def mutate(
        self,
        value: Any,
        index: int,
    ) -> None:

        self._impl.mutate(self._pack(value), index)

    @classmethod
    def new(
        cls,
        format: str,
    ) -> _TypedVectorSelf:

        return cls(format)

    def peek(
        self,
        index: int,
    ) -> Any:

        return self._unpack(self._impl.peek(index))

    def pop(
        self,
    ) -> Any:

        return self._unpack(self._impl.pop())

    def push(
        self,
        value: Any,
    ) -> None:

        self._impl.push(self._pack(value))

    def remove(
        self,
        index: int,
    ) -> Any:

        return self._unpack(self._impl.remove(index))

    def reserve(
        self,
        additional: int,
    ) -> None:

        self._impl.reserve(additional)

    def resize(
        self,
        new_capacity: int,
    ) -> None:

        self._impl.resize(new_capacity)

    def reverse(
        self,
    ) -> None:

        self._impl.reverse()

    def search(
        self,
        value: Any,
    ) -> Optional[int]:

        return self._impl.search(self._pack(value))

    def shrink_to_fit(
        self,
    ) -> None:

        self._impl.shrink_to_fit()

    def split_at(
        self,
        other: 'TypedVector',
        index: int,
    ) -> None:

        self._impl.split_at(self._check_peer(other)._impl, index)

    def swap(
        self,
        index1: int,
        index2: int,
    ) -> None:

        self._impl.swap(index1, index2)

    def swap_delete(
        self,
        index: int,
    ) -> None:

        self._impl.swap_delete(index)

    def swap_remove(
        self,
        index: int,
    ) -> Any:

        return self._unpack(self._impl.swap_remove(index))

    def to_list(
        self,
    ) -> List[Any]:
        r"""Unpacks all the values.

        Returns:
            list: Values, in order.
        """

        data = bytes(self._impl)
        if self._single:
            return [item[0] for item in self._struct.iter_unpack(data)]
        else:
            return list(self._struct.iter_unpack(data))

    def truncate(
        self,
        new_length: int,
    ) -> None:

        self._impl.truncate(new_length)

    @property
    def untyped(
        self,
    ) -> Vector:
        r""":obj:`bytevector.py.Vector`: Underlying type-erased vector."""

        return self._impl

    @classmethod
    def with_capacity(
        cls,
        capacity: int,
        format: str,
    ) -> _TypedVectorSelf:

        size = cls._make_struct(format).size
        return cls._wrap_impl(format, cls._Vector.with_capacity(capacity, size))

    @classmethod
    def with_value(
        cls,
        value: Any,
        length: int,
        format: str,
    ) -> _TypedVectorSelf:

        vector = cls(format)
        vector._impl = cls._Vector.with_value(vector._pack(value), length, vector._struct.size)
        return vector
