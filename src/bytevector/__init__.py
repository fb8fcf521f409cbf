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

r"""Contiguous growable arrays of fixed-size elements.

The audience of this module are those who need a uniform container for
opaque, fixed-size binary elements, stored back to back in a single
contiguous buffer, independently of what the elements actually are.

A *vector* is made of a small header and a byte *buffer*:

+--------+----------+-----------+--------+
| length | capacity | elem_size | buffer |
+========+==========+===========+========+
|   2    |    3     |     4     |   *    |
+--------+----------+-----------+--------+

The buffer is split into `capacity` *slots* of `elem_size` bytes each; only
the first `length` slots hold actual *elements*:

+------+------+------+
|  42  |  69  |      |
+------+------+------+

>>> from bytevector import Vector
>>> vector = Vector.with_capacity(3, 4)
>>> vector.push((42).to_bytes(4, 'little'))
>>> vector.push((69).to_bytes(4, 'little'))
>>> vector.length, vector.capacity, vector.elem_size
(2, 3, 4)

When a vector is full, adding elements grows its buffer, moving all the
elements into a larger one. This can be slow on large vectors, so it is best
to reserve enough slots in advance, via :meth:`Vector.with_capacity`,
:meth:`Vector.reserve`, or :meth:`Vector.resize`.

The growth policy is geometric: see :attr:`Vector.GROWTH_FACTOR` and
:attr:`Vector.GROWTH_STEP_MAX`, which subclasses can override.

Elements are plain bytes. A :obj:`TypedVector` packs and unpacks them via a
:mod:`struct` format, for convenience:

>>> from bytevector import TypedVector
>>> numbers = TypedVector.from_values([1, 4, 0, 1, 2, 3], '<i')
>>> tail = TypedVector('<i')
>>> numbers.split_at(tail, 3)
>>> str(numbers), str(tail)
('[1, 4, 0]', '[1, 2, 3]')

Contract violations, like out-of-range indices, raise subclasses of
:exc:`VectorFatalError`; recoverable failures raise the other subclasses of
:exc:`VectorError`, leaving the vector untouched.
"""

__version__ = '0.1.0'

import logging

from .base import AllocationFailed  # noqa: F401
from .base import BaseVector  # noqa: F401
from .base import ElementFormatMismatch  # noqa: F401
from .base import ElementSizeMismatch  # noqa: F401
from .base import EmptyVector  # noqa: F401
from .base import IndexOutOfBounds  # noqa: F401
from .base import InvalidBuffer  # noqa: F401
from .base import InvalidElementSize  # noqa: F401
from .base import InvalidHandle  # noqa: F401
from .base import InvalidValue  # noqa: F401
from .base import OverlappingBuffers  # noqa: F401
from .base import VectorError  # noqa: F401
from .base import VectorFatalError  # noqa: F401
from .base import WouldTruncate  # noqa: F401
from .py import Vector  # noqa: F401
from .py import drop_many  # noqa: F401
from .typed import TypedVector  # noqa: F401

logging.getLogger(__name__).addHandler(logging.NullHandler())
