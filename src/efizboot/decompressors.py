# EFI zboot unpacker
#
# This file is part of efizboot.
#
# efizboot is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License, version 3,
# as published by the Free Software Foundation.
#
# efizboot is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public
# License, version 3, along with efizboot.  If not, see
# <http://www.gnu.org/licenses/>
#
# Licensed under the terms of the GNU Affero General Public License
# version 3
# SPDX-License-Identifier: AGPL-3.0-only

import gzip

from . import magic
from .UnpackParserException import UnknownCompressionType


def decompress_gunzip(data):
    # errors (gzip.BadGzipFile, EOFError, zlib.error) are passed on as is
    return gzip.decompress(data)


class DecompressorCollection:
    '''Ordered collection of (compression type datum, function) pairs.
    The compression type field of a header is compared with the data of
    each datum, in the order in which they were added.'''

    def __init__(self):
        self.clear()

    def clear(self):
        self._decompressors = []

    def add(self, datum, function):
        self._decompressors.append((datum, function))

    @property
    def names(self):
        return [datum.value for datum, _ in self._decompressors]

    def lookup(self, compression_tag):
        for datum, function in self._decompressors:
            if datum.matches(compression_tag):
                return datum, function
        raise UnknownCompressionType(compression_tag)

    def decompress(self, compression_tag, data):
        _, function = self.lookup(compression_tag)
        return function(data)


def default_decompressors():
    decompressors = DecompressorCollection()
    decompressors.add(magic.GZIP, decompress_gunzip)
    return decompressors


def decompress(compression_tag, payload, decompressors=None):
    if decompressors is None:
        decompressors = default_decompressors()
    return decompressors.decompress(compression_tag, payload)
