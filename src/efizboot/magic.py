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

import enum

from dataclasses import dataclass, field
from typing import Optional

from .UnpackParserException import ContentMismatch


class Architecture(enum.Enum):
    ARM64 = 'arm64'
    RISCV = 'riscv'


@dataclass(frozen=True)
class Datum:
    '''A named magic value used to check fields and to detect signatures.

    The canonical bytes (data) are either the raw bytes, or the payload
    encoded as ASCII, zero padded to padding bytes (if padding is set) or
    followed by add_byte (if add_byte is set). Only one of raw, padding and
    add_byte can be used. The data is computed once.
    '''
    payload: str
    padding: int = 0
    add_byte: Optional[int] = None
    raw: bytes = b''
    data: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        modes = [bool(self.raw), self.padding > 0, self.add_byte is not None]
        if sum(modes) > 1:
            raise ValueError(f'{self.payload}: only one of raw, padding and add_byte can be set')

        if self.raw:
            data = bytes(self.raw)
        else:
            data = self.payload.encode('ascii').ljust(self.padding, b'\x00')
            if self.add_byte is not None:
                data += bytes([self.add_byte])
        object.__setattr__(self, 'data', data)

    @property
    def value(self):
        '''The name of the datum'''
        return self.payload

    def matches(self, observed):
        return bytes(observed) == self.data


def check(field_name, observed, datum):
    '''Raise a ContentMismatch if observed is not the canonical data of datum'''
    if not datum.matches(observed):
        raise ContentMismatch(field_name, observed, datum.data)


MSDOS_MAGIC = Datum('MZ')
ZIMG = Datum('zimg')

# aka \xcd\x23\x82\x81
LINUX_MAGIC = Datum('Linux', raw=b'\xcd\x23\x82\x81')

# compression type names are NUL padded to the width of the header field
GZIP = Datum('gzip', padding=32)

ARM = Datum('ARM', add_byte=0x64)
RISC = Datum('RSC', add_byte=0x05)

# order matters: the first match wins
ARCHITECTURES = (
    (ARM, Architecture.ARM64),
    (RISC, Architecture.RISCV),
)
