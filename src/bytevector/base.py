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

r"""Common stuff, shared across modules."""

import abc
from typing import Any
from typing import Optional
from typing import TypeAlias
from typing import TypeVar
from typing import Union

BytesLike: TypeAlias = Union[bytes, bytearray, memoryview]
Buffer: TypeAlias = Union[bytearray, memoryview]

GROWTH_FACTOR: float = 2
r"""Default geometric growth factor, applied when a full vector grows."""

GROWTH_STEP_MAX: int = 1 << 24
r"""Default maximum growth step, in bytes."""

_VectorSelf = TypeVar('_VectorSelf', bound='BaseVector')


class VectorError(Exception):
    r"""Base class of all the vector errors."""


class VectorFatalError(VectorError):
    r"""Caller contract violation.

    These errors signal programming bugs, like invalid element sizes or
    out-of-range indices. They are not meant to be recovered from: the
    operation raising them has not touched the vector, but the calling code
    is wrong.
    """


class InvalidElementSize(VectorFatalError, ValueError):
    r"""The element size is not a positive integer."""


class IndexOutOfBounds(VectorFatalError, IndexError):
    r"""An index is outside the allowed range of the vector."""


class AllocationFailed(VectorError, MemoryError):
    r"""The buffer could not be allocated."""


class InvalidHandle(VectorError, TypeError):
    r"""A required vector argument is missing, of the wrong type, or dropped."""


class InvalidValue(VectorError, ValueError):
    r"""A typed value does not fit the element format."""


class InvalidBuffer(VectorError, ValueError):
    r"""A required buffer is missing or unsuitable."""


class EmptyVector(VectorError, IndexError):
    r"""The vector has no items to take."""


class WouldTruncate(VectorError, ValueError):
    r"""The requested capacity cannot hold the current items."""


class ElementSizeMismatch(VectorError, ValueError):
    r"""An element or a vector has a different element size."""


class ElementFormatMismatch(VectorError, TypeError):
    r"""Typed vectors have different element formats."""


class OverlappingBuffers(VectorError, ValueError):
    r"""Source and target of a bulk operation share the same buffer."""


class BaseVector(abc.ABC):
    r"""Contiguous growable array of fixed-size elements.

    A vector owns a single contiguous byte buffer, split into *slots* of
    `elem_size` bytes each. The first `length` slots hold the *elements*;
    the remaining ``capacity - length`` slots are reserved for future
    insertions and never read.

    +--------+----------+-----------+--------+
    | length | capacity | elem_size | buffer |
    +========+==========+===========+========+
    |   2    |    3     |     4     |   ...  |
    +--------+----------+-----------+--------+

    Elements are plain bytes: the vector never interprets them, and it never
    runs any cleanup on them when they are discarded.

    The vector is either *empty* (``capacity == 0``, no buffer) or
    *populated* (``capacity > 0``, with a buffer of at least
    ``capacity * elem_size`` bytes).

    Arguments:
        elem_size (int):
            Size of each element, in bytes. Must be positive.

    Raises:
        InvalidElementSize: `elem_size` is not positive.

    Examples:
        >>> from bytevector import Vector
        >>> vector = Vector(2)
        >>> vector.push(b'AB')
        >>> vector.push(b'CD')
        >>> vector.insert(b'xy', 1)
        >>> bytes(vector)
        b'ABxyCD'
        >>> len(vector)
        3
        >>> vector.pop()
        b'CD'
        >>> str(vector)
        '[4142, 7879]'
    """

    @abc.abstractmethod
    def __bool__(
        self,
    ) -> bool:
        r"""Has any items.

        Returns:
            bool: Has any items.

        Examples:
            >>> from bytevector import Vector
            >>> bool(Vector(1))
            False
            >>> bool(Vector.with_value(b'x', 3, 1))
            True
        """
        ...

    @abc.abstractmethod
    def __bytes__(
        self,
    ) -> bytes:
        r"""Creates a bytes clone of the elements.

        Reserved slots are not included.

        Returns:
            :obj:`bytes`: Cloned element data.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.with_capacity(8, 1)
            >>> vector.push(b'A')
            >>> bytes(vector)
            b'A'
        """
        ...

    @abc.abstractmethod
    def __contains__(
        self,
        value: BytesLike,
    ) -> bool:
        r"""Checks if an element is contained.

        See Also:
            :meth:`contains`
        """
        ...

    @abc.abstractmethod
    def __eq__(
        self,
        other: Any,
    ) -> bool:
        r"""Equality comparison.

        Two vectors are equal when they have the same element size and the
        same element bytes; capacity does not matter.
        A vector also compares equal to any *byte-like* object holding the
        very same bytes.

        Arguments:
            other (:obj:`BaseVector` or byte-like):
                Data to compare with `self`.

        Returns:
            bool: `self` is equal to `other`.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.with_value(b'ab', 2, 2)
            >>> vector == b'abab'
            True
            >>> vector == Vector.with_value(b'a', 4, 1)
            False
        """
        ...

    @abc.abstractmethod
    def __init__(
        self,
        elem_size: int,
    ):
        ...

    @abc.abstractmethod
    def __len__(
        self,
    ) -> int:
        r"""Number of elements.

        Returns:
            int: The :attr:`length` of the vector.
        """
        ...

    @abc.abstractmethod
    def append(
        self,
        other: 'BaseVector',
    ) -> None:
        r"""Moves all the elements of another vector to the end.

        The elements of `other` are copied after the last element of `self`,
        then `other` is cleared.

        If `self` has no buffer yet, one is allocated to hold exactly the
        elements of `other`; otherwise, if they do not fit, the capacity is
        increased by the length of `other`.

        Arguments:
            other (:obj:`BaseVector`):
                Vector to drain.

        Raises:
            InvalidHandle: `other` is not a valid vector.
            ElementSizeMismatch: Element sizes differ.
            OverlappingBuffers: `other` is `self`.
            AllocationFailed: Growth failed; both vectors are untouched.

        Examples:
            >>> from bytevector import Vector
            >>> head = Vector.with_value(b'a', 2, 1)
            >>> tail = Vector.with_value(b'z', 3, 1)
            >>> head.append(tail)
            >>> bytes(head), bytes(tail)
            (b'aazzz', b'')
        """
        ...

    @property
    @abc.abstractmethod
    def buffer(
        self,
    ) -> Optional[Buffer]:
        r"""Backing buffer, or ``None`` when not allocated.

        The buffer holds at least ``capacity * elem_size`` bytes. It is owned
        by the vector; writing into it bypasses all the checks.
        """
        ...

    @property
    @abc.abstractmethod
    def capacity(
        self,
    ) -> int:
        r"""int: Number of slots the buffer can hold."""
        ...

    @abc.abstractmethod
    def clear(
        self,
    ) -> None:
        r"""Clears the vector, releasing its buffer.

        Unlike :meth:`list.clear` and most container libraries, the reserved
        memory is not retained: both :attr:`length` and :attr:`capacity`
        become zero, and the buffer is dropped, so that stale element data
        does not linger in reserved slots.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.with_capacity(4, 1)
            >>> vector.push(b'A')
            >>> vector.clear()
            >>> vector.length, vector.capacity, vector.buffer
            (0, 0, None)
        """
        ...

    @abc.abstractmethod
    def contains(
        self,
        value: BytesLike,
    ) -> bool:
        r"""Checks if an element is contained.

        Elements are compared byte by byte, scanning from the start and
        stopping at the first match.

        Arguments:
            value (byte-like):
                Element to find; exactly :attr:`elem_size` bytes.

        Returns:
            bool: `value` is contained.

        Raises:
            ElementSizeMismatch: `value` has the wrong size.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.with_value(b'ab', 2, 2)
            >>> vector.contains(b'ab')
            True
            >>> vector.contains(b'ba')
            False
        """
        ...

    @abc.abstractmethod
    def copy(
        self,
        other: 'BaseVector',
    ) -> None:
        r"""Deep copies the vector into another one.

        The buffer of `other` is released, then replaced by a fresh buffer
        with the same capacity of `self`, holding a copy of the elements of
        `self`. `other` also takes the length, capacity, and element size of
        `self`.

        Arguments:
            other (:obj:`BaseVector`):
                Target vector.

        Raises:
            InvalidHandle: `other` is not a valid vector.
            AllocationFailed: The new buffer could not be allocated;
                `other` is untouched.

        Examples:
            >>> from bytevector import Vector
            >>> source = Vector.with_value(b'ab', 2, 2)
            >>> target = Vector(1)
            >>> source.copy(target)
            >>> bytes(target), target.elem_size
            (b'abab', 2)
        """
        ...

    @abc.abstractmethod
    def delete(
        self,
        index: int,
    ) -> None:
        r"""Deletes an element, shifting the following ones left.

        Capacity is kept.

        Arguments:
            index (int):
                Index of the element to delete.

        Raises:
            IndexOutOfBounds: ``index >= length``.

        See Also:
            :meth:`remove`
            :meth:`swap_delete`
        """
        ...

    @abc.abstractmethod
    def drop(
        self,
    ) -> None:
        r"""Releases the vector.

        The buffer is released and the vector becomes unusable: any further
        call, including another :meth:`drop`, raises :exc:`InvalidHandle`.
        """
        ...

    @property
    @abc.abstractmethod
    def elem_size(
        self,
    ) -> int:
        r"""int: Size of each element, in bytes."""
        ...

    @classmethod
    @abc.abstractmethod
    def from_raw_parts(
        cls,
        raw: Any,
        length: int,
        elem_size: int,
    ) -> _VectorSelf:
        r"""Adopts an existing buffer.

        The vector takes ownership of `raw` without copying it: the caller
        must not use it any more, neither directly nor through other views.

        A :obj:`bytearray` is adopted as it is. Any other writable,
        C-contiguous object supporting the *buffer protocol* (*e.g.*
        :obj:`array.array`, ``numpy.ndarray``) is adopted via a byte-cast
        :obj:`memoryview`.

        Both :attr:`length` and :attr:`capacity` become `length`.

        Arguments:
            raw (*buffer*):
                Buffer to adopt, holding at least ``length * elem_size``
                bytes.

            length (int):
                Number of elements stored in `raw`.

            elem_size (int):
                Size of each element, in bytes.

        Returns:
            :obj:`BaseVector`: The vector owning `raw`.

        Raises:
            InvalidElementSize: `elem_size` is not positive.
            InvalidBuffer: `raw` is missing, read-only, not contiguous,
                or too small.

        Examples:
            >>> from bytevector import Vector
            >>> raw = bytearray(b'ABCDEF')
            >>> vector = Vector.from_raw_parts(raw, 3, 2)
            >>> vector.buffer is raw
            True
            >>> vector.pop()
            b'EF'
        """
        ...

    @abc.abstractmethod
    def inner_copy(
        self,
        other: 'BaseVector',
        start: int,
        end: int,
    ) -> None:
        r"""Copies a slice of the vector into another one.

        `other` is reallocated to hold exactly the elements within
        ``[start, end)``, and takes the element size of `self`.
        `other` can be `self` itself.

        Arguments:
            other (:obj:`BaseVector`):
                Target vector.

            start (int):
                Inclusive start index.

            end (int):
                Exclusive end index.

        Raises:
            InvalidHandle: `other` is not a valid vector.
            IndexOutOfBounds: ``end > length`` or ``start > end``.
            AllocationFailed: The new buffer could not be allocated.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.with_capacity(8, 1)
            >>> for c in b'ABCDE':
            ...     vector.push(bytes([c]))
            >>> vector.inner_copy(vector, 1, 4)
            >>> bytes(vector), vector.capacity
            (b'BCD', 3)
        """
        ...

    @abc.abstractmethod
    def insert(
        self,
        value: BytesLike,
        index: int,
    ) -> None:
        r"""Inserts an element.

        The elements from `index` onwards are shifted right by one slot.
        Inserting at ``index == length`` is the same as :meth:`push`.

        Arguments:
            value (byte-like):
                Element to insert; exactly :attr:`elem_size` bytes.

            index (int):
                Index of the inserted element.

        Raises:
            IndexOutOfBounds: ``index > length``.
            ElementSizeMismatch: `value` has the wrong size.
            AllocationFailed: Growth failed; the vector is untouched.
        """
        ...

    @abc.abstractmethod
    def is_empty(
        self,
    ) -> bool:
        r"""Checks if there are no elements.

        Returns:
            bool: ``length == 0``.
        """
        ...

    @property
    @abc.abstractmethod
    def length(
        self,
    ) -> int:
        r"""int: Number of elements."""
        ...

    @abc.abstractmethod
    def mutate(
        self,
        value: BytesLike,
        index: int,
    ) -> None:
        r"""Overwrites an element.

        Arguments:
            value (byte-like):
                New element; exactly :attr:`elem_size` bytes.

            index (int):
                Index of the element to overwrite.

        Raises:
            IndexOutOfBounds: ``index >= length``.
            ElementSizeMismatch: `value` has the wrong size.
        """
        ...

    @classmethod
    def new(
        cls,
        elem_size: int,
    ) -> _VectorSelf:
        r"""Creates an empty vector.

        No buffer is allocated until elements are added.

        Arguments:
            elem_size (int):
                Size of each element, in bytes.

        Returns:
            :obj:`BaseVector`: Empty vector.

        Raises:
            InvalidElementSize: `elem_size` is not positive.
        """

        return cls(elem_size)

    @abc.abstractmethod
    def peek(
        self,
        index: int,
    ) -> Optional[memoryview]:
        r"""Looks at an element.

        The returned view aliases the buffer. It reflects shifts made by
        later operations, and it gets detached from the vector by later
        reallocations: take a copy with :obj:`bytes` to keep the value.

        Arguments:
            index (int):
                Index of the element.

        Returns:
            :obj:`memoryview`: Read-only view of the element slot.

        Raises:
            IndexOutOfBounds: ``index >= length``.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.from_raw_parts(bytearray(b'ABCD'), 2, 2)
            >>> bytes(vector.peek(1))
            b'CD'
            >>> vector.peek(1).readonly
            True
        """
        ...

    @abc.abstractmethod
    def pop(
        self,
    ) -> bytes:
        r"""Takes the last element.

        Capacity is kept.

        Returns:
            :obj:`bytes`: The removed element.

        Raises:
            EmptyVector: There are no elements; the vector is untouched.
        """
        ...

    @abc.abstractmethod
    def push(
        self,
        value: BytesLike,
    ) -> None:
        r"""Appends an element.

        When the vector is full, it grows according to its growth policy
        before writing.

        Arguments:
            value (byte-like):
                Element to append; exactly :attr:`elem_size` bytes.

        Raises:
            ElementSizeMismatch: `value` has the wrong size.
            AllocationFailed: Growth failed; the vector is untouched.
        """
        ...

    @abc.abstractmethod
    def remove(
        self,
        index: int,
    ) -> bytes:
        r"""Takes an element, shifting the following ones left.

        Arguments:
            index (int):
                Index of the element to take.

        Returns:
            :obj:`bytes`: The removed element.

        Raises:
            IndexOutOfBounds: ``index >= length``.
        """
        ...

    @abc.abstractmethod
    def reserve(
        self,
        additional: int,
    ) -> None:
        r"""Reserves more slots.

        Capacity grows by exactly `additional` slots, regardless of the
        current free slots.

        Arguments:
            additional (int):
                Number of slots to add.

        Raises:
            ValueError: `additional` is negative.
            AllocationFailed: The buffer could not be grown; the vector is
                untouched.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.with_capacity(2, 4)
            >>> vector.reserve(3)
            >>> vector.capacity
            5
        """
        ...

    @abc.abstractmethod
    def resize(
        self,
        new_capacity: int,
    ) -> None:
        r"""Grows the capacity up to a target.

        Nothing happens if the capacity is already at least `new_capacity`.

        Arguments:
            new_capacity (int):
                Target capacity.

        Raises:
            WouldTruncate: ``length > new_capacity``; see :meth:`truncate`.
            AllocationFailed: The buffer could not be grown; the vector is
                untouched.
        """
        ...

    @abc.abstractmethod
    def reverse(
        self,
    ) -> None:
        r"""Reverses the order of the elements, in place.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.from_raw_parts(bytearray(b'ABCDEF'), 3, 2)
            >>> vector.reverse()
            >>> bytes(vector)
            b'EFCDAB'
        """
        ...

    @abc.abstractmethod
    def search(
        self,
        value: BytesLike,
    ) -> Optional[int]:
        r"""Finds the first index of an element.

        Arguments:
            value (byte-like):
                Element to find; exactly :attr:`elem_size` bytes.

        Returns:
            int: Index of the first matching element, or ``None`` if not
            found.

        Raises:
            ElementSizeMismatch: `value` has the wrong size.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.from_raw_parts(bytearray(b'ABCDAB'), 3, 2)
            >>> vector.search(b'AB')
            0
            >>> vector.search(b'CD')
            1
            >>> vector.search(b'BC') is None
            True
        """
        ...

    @abc.abstractmethod
    def shrink_to_fit(
        self,
    ) -> None:
        r"""Shrinks the capacity down to the length.

        The buffer is released when there are no elements.
        """
        ...

    @abc.abstractmethod
    def split_at(
        self,
        other: 'BaseVector',
        index: int,
    ) -> None:
        r"""Splits the vector in two.

        `self` keeps the elements within ``[0, index)``, with the same
        capacity. `other` is reallocated to hold exactly the elements within
        ``[index, length)``.

        Arguments:
            other (:obj:`BaseVector`):
                Vector receiving the tail elements.

            index (int):
                Split index.

        Raises:
            InvalidHandle: `other` is not a valid vector.
            ElementSizeMismatch: Element sizes differ.
            OverlappingBuffers: `other` is `self`.
            IndexOutOfBounds: ``index > length``.
            AllocationFailed: The buffer of `other` could not be allocated;
                both vectors are untouched.

        Examples:
            >>> from bytevector import Vector
            >>> head = Vector.from_raw_parts(bytearray(b'ABCDEF'), 6, 1)
            >>> tail = Vector(1)
            >>> head.split_at(tail, 4)
            >>> bytes(head), bytes(tail)
            (b'ABCD', b'EF')
        """
        ...

    @abc.abstractmethod
    def swap(
        self,
        index1: int,
        index2: int,
    ) -> None:
        r"""Swaps two elements.

        Arguments:
            index1 (int):
                Index of the first element.

            index2 (int):
                Index of the second element.

        Raises:
            IndexOutOfBounds: Any index is ``>= length``.
        """
        ...

    @abc.abstractmethod
    def swap_delete(
        self,
        index: int,
    ) -> None:
        r"""Deletes an element, replacing it with the last one.

        This takes constant time, but does not preserve the element order.

        Arguments:
            index (int):
                Index of the element to delete.

        Raises:
            IndexOutOfBounds: ``index >= length``.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.from_raw_parts(bytearray(b'ABCD'), 4, 1)
            >>> vector.swap_delete(0)
            >>> bytes(vector)
            b'DBC'
        """
        ...

    @abc.abstractmethod
    def swap_remove(
        self,
        index: int,
    ) -> bytes:
        r"""Takes an element, replacing it with the last one.

        Arguments:
            index (int):
                Index of the element to take.

        Returns:
            :obj:`bytes`: The removed element.

        Raises:
            IndexOutOfBounds: ``index >= length``.

        See Also:
            :meth:`swap_delete`
        """
        ...

    @abc.abstractmethod
    def truncate(
        self,
        new_length: int,
    ) -> None:
        r"""Truncates the vector.

        Both :attr:`length` and :attr:`capacity` become `new_length`, and
        the exceeding elements are discarded.
        Nothing happens if `new_length` is not less than the length.
        Truncating to zero is the same as :meth:`clear`.

        Arguments:
            new_length (int):
                Number of elements to keep.

        Raises:
            ValueError: `new_length` is negative.
            AllocationFailed: The new buffer could not be allocated.

        Examples:
            >>> from bytevector import Vector
            >>> vector = Vector.with_capacity(9, 1)
            >>> for c in b'ABCD':
            ...     vector.push(bytes([c]))
            >>> vector.truncate(2)
            >>> bytes(vector), vector.capacity
            (b'AB', 2)
        """
        ...

    @classmethod
    @abc.abstractmethod
    def with_capacity(
        cls,
        capacity: int,
        elem_size: int,
    ) -> _VectorSelf:
        r"""Creates an empty vector with reserved slots.

        The vector can hold `capacity` elements without reallocating.
        A zero `capacity` is the same as calling :meth:`new`.

        Arguments:
            capacity (int):
                Number of slots to reserve.

            elem_size (int):
                Size of each element, in bytes.

        Returns:
            :obj:`BaseVector`: Empty vector.

        Raises:
            InvalidElementSize: `elem_size` is not positive.
            AllocationFailed: The buffer could not be allocated.
        """
        ...

    @classmethod
    @abc.abstractmethod
    def with_value(
        cls,
        value: BytesLike,
        length: int,
        elem_size: int,
    ) -> _VectorSelf:
        r"""Creates a vector filled with copies of the same element.

        Both :attr:`length` and :attr:`capacity` become `length`.

        Arguments:
            value (byte-like):
                Fill element; exactly `elem_size` bytes.

            length (int):
                Number of copies.

            elem_size (int):
                Size of each element, in bytes.

        Returns:
            :obj:`BaseVector`: Filled vector.

        Raises:
            InvalidElementSize: `elem_size` is not positive.
            ElementSizeMismatch: `value` has the wrong size.
            AllocationFailed: The buffer could not be allocated.

        Examples:
            >>> from bytevector import Vector
            >>> bytes(Vector.with_value(b'ab', 3, 2))
            b'ababab'
        """
        ...
