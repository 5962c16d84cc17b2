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

import dataclasses

from dataclasses import dataclass
from typing import Optional

from kaitaistruct import ValidationFailedError

from efizboot import magic
from efizboot.UnpackParser import UnpackParser, check_condition, open_input
from efizboot.UnpackParserException import TruncatedInput, InvalidPayloadBounds
from efizboot.UnpackParserException import ShortRead, EmptyBody
from efizboot.UnpackParserException import PayloadTooShort, UnknownArchitecture
from efizboot.configuration import ZbootConfig
from efizboot.decompressors import default_decompressors
from efizboot.log import log, set_debug
from . import zboot

# size of the complete header, including the PE header offset
HEADER_SIZE = 64

# offset of the architecture magic in a decompressed kernel image
ARCH_MAGIC_OFFSET = 56

# the magic fields are checked in this order
MAGIC_CHECKS = [
    ('msdos_magic', magic.MSDOS_MAGIC),
    ('linux_magic', magic.LINUX_MAGIC),
    ('zimg', magic.ZIMG),
]


@dataclass(frozen=True)
class Header:
    msdos_magic: bytes
    reserved0: bytes
    zimg: bytes
    payload_offset: int
    payload_size: int
    reserved1: bytes
    compression_type: bytes
    linux_magic: bytes
    pe_header_offset: int

    @classmethod
    def from_kaitai(cls, data):
        return cls(**{f.name: getattr(data, f.name) for f in dataclasses.fields(cls)})

    @property
    def compression_name(self):
        return self.compression_type.rstrip(b'\x00').decode('ascii', errors='replace')


@dataclass(frozen=True)
class BootInfo:
    '''The decoded header and, if requested, the payload ("body").'''
    header: Header
    body: Optional[bytes] = None
    config: ZbootConfig = ZbootConfig()

    @property
    def headers(self):
        return self.header


def decode(source):
    '''Decode the header at the start of source, which is either a
    bytes-like object or a binary file.'''
    infile = open_input(source)
    infile.seek(0)
    try:
        data = zboot.Zboot.from_bytes(infile.read(HEADER_SIZE))
    except (EOFError, ValidationFailedError) as e:
        raise TruncatedInput(f'cannot decode header: {e}')
    return Header.from_kaitai(data)


def validate(header, buffer_length):
    for field_name, datum in MAGIC_CHECKS:
        magic.check(field_name, getattr(header, field_name), datum)

    check_condition(header.payload_offset != 0 and header.payload_size != 0,
                    'payload size/offset is zero', InvalidPayloadBounds)
    check_condition(header.payload_offset + header.payload_size <= buffer_length,
                    'invalid offset/payload, beyond size', InvalidPayloadBounds)


def extract(source, header):
    '''Read the payload. The header should have been validated.'''
    infile = open_input(source)
    infile.seek(header.payload_offset)
    body = infile.read(header.payload_size)
    if len(body) != header.payload_size:
        raise ShortRead(header.payload_size, len(body))
    return body


def sniff(payload):
    '''Determine the architecture of a decompressed kernel image'''
    if len(payload) < ARCH_MAGIC_OFFSET + len(magic.ARM.data):
        raise PayloadTooShort(len(payload))

    observed = bytes(payload[ARCH_MAGIC_OFFSET:ARCH_MAGIC_OFFSET + len(magic.ARM.data)])
    for datum, architecture in magic.ARCHITECTURES:
        if datum.matches(observed):
            return architecture
    raise UnknownArchitecture(observed)


def read_info(source, config=None):
    '''Decode and validate the header of source and, if config.parse_body
    is set, extract the payload.'''
    if config is None:
        config = ZbootConfig()
    if config.debug:
        set_debug(True)
    infile = open_input(source)

    header = decode(infile)
    if config.debug:
        log.debug(f'read_info: {header}')

    validate(header, infile.size)

    body = None
    if config.parse_body:
        body = extract(infile, header)
        if config.debug:
            log.debug(f'read_info: read: {len(body)}')
    return BootInfo(header=header, body=body, config=config)


def unpack_body(info, config=None, decompressors=None):
    '''Returns the bytes to write for info and the detected architecture.
    The architecture is only determined (and None otherwise) if the payload
    is decompressed.'''
    if config is None:
        config = info.config
    if config.debug:
        set_debug(True)
    body = info.body
    if not body:
        raise EmptyBody()
    if config.debug:
        log.debug(f'unpack_body: body: {len(body)}')
    if not config.decompress:
        return body, None

    if decompressors is None:
        decompressors = default_decompressors()
    if config.debug:
        log.debug(f'unpack_body: decompressors: {decompressors.names}')
    datum, function = decompressors.lookup(info.header.compression_type)
    if config.debug:
        log.debug(f'unpack_body: compression: {datum.value}')

    body = function(body)
    if config.debug:
        log.debug(f'unpack_body: decompressed {len(info.body)} -> {len(body)}')

    architecture = sniff(body)
    if config.debug:
        log.debug(f'unpack_body: found type: {architecture.value}')
    return body, architecture


def write(info, outfile, config=None, decompressors=None):
    '''Write the (optionally decompressed) payload of info to outfile.
    Returns the number of bytes written.'''
    body, _ = unpack_body(info, config, decompressors)
    outfile.write(body)
    return len(body)


class ZbootUnpackParser(UnpackParser):
    pretty_name = 'zboot'

    def __init__(self, infile, offset=0, configuration=None):
        if configuration is None:
            configuration = ZbootConfig(parse_body=True)
        super().__init__(infile, offset, configuration)
        self.decompressors = default_decompressors()
        self.architecture = None

    def parse(self):
        self.boot_info = read_info(self.infile, self.configuration)

    def calculate_unpacked_size(self):
        header = self.boot_info.header
        self.unpacked_size = header.payload_offset + header.payload_size

    def unpack(self, outfile):
        body, self.architecture = unpack_body(self.boot_info, self.configuration,
                                              self.decompressors)
        outfile.write(body)
        return len(body)

    @property
    def labels(self):
        labels = ['zboot', 'efi', 'linux kernel']
        if self.boot_info.header.compression_name:
            labels.append('compressed')
        return labels

    @property
    def metadata(self):
        header = self.boot_info.header
        metadata = {
            'compression': header.compression_name,
            'payload_offset': header.payload_offset,
            'payload_size': header.payload_size,
            'pe_header_offset': header.pe_header_offset,
        }
        if self.architecture is not None:
            metadata['architecture'] = self.architecture.value
        return metadata
