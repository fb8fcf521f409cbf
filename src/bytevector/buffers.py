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

r"""Buffer management and raw byte moves.

Functions here operate on *offsets* and *sizes* in bytes, and do not check
their arguments against vector bounds: callers are expected to have done so.
"""

import logging
from typing import Any
from typing import Optional

from .base import AllocationFailed
from .base import Buffer
from .base import BytesLike
from .base import ElementSizeMismatch
from .base import InvalidBuffer

_logger = logging.getLogger(__name__)


def adopt(
    raw: Any,
    size: int,
) -> Buffer:
    r"""Takes an external buffer as it is.

    Arguments:
        raw (*buffer*):
            Object supporting the writable *buffer protocol*.

        size (int):
            Minimum required size, in bytes.

    Returns:
        *buffer*: `raw` itself if :obj:`bytearray`, else a byte-cast
        :obj:`memoryview` of it.

    Raises:
        InvalidBuffer: `raw` is missing, read-only, not contiguous, or
            smaller than `size`.
    """

    if raw is None:
        raise InvalidBuffer('missing buffer')

    if isinstance(raw, bytearray):
        buffer = raw
    else:
        try:
            view = memoryview(raw)
        except TypeError as exc:
            raise InvalidBuffer('buffer protocol not supported') from exc

        if view.readonly:
            raise InvalidBuffer('read-only buffer')
        if not view.c_contiguous:
            raise InvalidBuffer('non-contiguous buffer')
        buffer = view.cast('B')

    if len(buffer) < size:
        raise InvalidBuffer(f'buffer too small: {len(buffer)} < {size}')
    return buffer


def allocate(
    count: int,
    elem_size: int,
) -> Optional[bytearray]:
    r"""Allocates a zeroed buffer.

    Arguments:
        count (int):
            Number of slots.

        elem_size (int):
            Slot size, in bytes.

    Returns:
        :obj:`bytearray`: New buffer, or ``None`` if `count` is zero.

    Raises:
        AllocationFailed: Not enough memory.
    """

    if not count:
        return None

    size = count * elem_size
    try:
        return bytearray(size)
    except (MemoryError, OverflowError) as exc:
        raise AllocationFailed(f'cannot allocate {size} bytes') from exc


def as_element(
    value: BytesLike,
    elem_size: int,
) -> bytes:
    r"""Collects the bytes of an element.

    Arguments:
        value (byte-like):
            Object supporting the *buffer protocol*.

        elem_size (int):
            Required size, in bytes.

    Returns:
        :obj:`bytes`: Raw bytes of `value`, in C order.

    Raises:
        InvalidBuffer: `value` does not support the buffer protocol.
        ElementSizeMismatch: `value` is not `elem_size` bytes long.
    """

    if value is None:
        raise InvalidBuffer('missing element')
    try:
        view = memoryview(value)
    except TypeError as exc:
        raise InvalidBuffer('buffer protocol not supported') from exc

    with view:
        if view.nbytes != elem_size:
            raise ElementSizeMismatch(f'element size is {elem_size} but value has {view.nbytes} bytes')
        return view.tobytes()


def copy(
    target: Buffer,
    target_offset: int,
    source: Buffer,
    source_offset: int,
    size: int,
) -> None:
    r"""Copies bytes across distinct buffers.

    The two regions must not overlap; see :func:`move` otherwise.
    """

    if size > 0:
        target[target_offset:(target_offset + size)] = source[source_offset:(source_offset + size)]


def fill(
    value: bytes,
    count: int,
) -> Optional[bytearray]:
    r"""Allocates a buffer holding `count` copies of `value`."""

    if not count:
        return None
    try:
        return bytearray(value) * count
    except (MemoryError, OverflowError) as exc:
        raise AllocationFailed(f'cannot allocate {len(value) * count} bytes') from exc


def move(
    buffer: Buffer,
    target_offset: int,
    source_offset: int,
    size: int,
) -> None:
    r"""Moves bytes within the same buffer.

    Overlapping regions are handled correctly.
    """

    if size > 0 and target_offset != source_offset:
        chunk = buffer[source_offset:(source_offset + size)]
        if isinstance(chunk, memoryview):
            chunk = chunk.tobytes()  # views alias the source region
        buffer[target_offset:(target_offset + size)] = chunk


def reallocate(
    buffer: Optional[Buffer],
    used: int,
    old_count: int,
    count: int,
    elem_size: int,
) -> Optional[bytearray]:
    r"""Moves the used bytes into a fresh buffer.

    The old buffer is never resized in place, so it survives a failed
    allocation, and views previously taken on it stay valid memory.

    Arguments:
        buffer (*buffer*):
            Old buffer, or ``None``.

        used (int):
            Number of leading bytes to keep; at most ``count * elem_size``.

        old_count (int):
            Number of slots of the old buffer, as tracked by its owner.

        count (int):
            Number of slots of the new buffer.

        elem_size (int):
            Slot size, in bytes.

    Returns:
        :obj:`bytearray`: New buffer, or ``None`` if `count` is zero.

    Raises:
        AllocationFailed: Not enough memory; `buffer` is untouched.
    """

    _logger.debug('reallocating %d -> %d slots of %d bytes', old_count, count, elem_size)

    new_buffer = allocate(count, elem_size)
    if new_buffer is not None and buffer is not None:
        copy(new_buffer, 0, buffer, 0, used)
    return new_buffer


def swap(
    buffer: Buffer,
    offset1: int,
    offset2: int,
    size: int,
) -> None:
    r"""Exchanges two regions of the same buffer through a scratch copy."""

    if offset1 != offset2:
        scratch = bytes(buffer[offset1:(offset1 + size)])
        move(buffer, offset1, offset2, size)
        buffer[offset2:(offset2 + size)] = scratch
