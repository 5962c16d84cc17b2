import base64
import gzip
import io
import logging
import os
import pathlib
import struct

import pytest

from efizboot import magic
from efizboot.log import log
from efizboot.UnpackParser import OffsetInputFile
from efizboot.parsers.zboot.UnpackParser import HEADER_SIZE, ARCH_MAGIC_OFFSET

_scriptdir = os.path.dirname(__file__)
testdir_base = pathlib.Path(_scriptdir).resolve()

# header of a real zboot image (arm64, gzip compressed), payload left out
TEST_HEADER = "TVoAAHppbWdIyQAA0tiyAAAAAAAAAAAAZ3ppcAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAADNI4KBQAAAAA=="

# payload offset in TEST_HEADER
TEST_PAYLOAD_OFFSET = 51528


def get_test_data():
    return bytearray(base64.b64decode(TEST_HEADER))

def set_u32(data, offset, value):
    data[offset:offset+4] = struct.pack('<I', value)

def get_test_image(payload_size=1, trailer_size=65535):
    '''The test header, followed by trailer_size bytes of counting data
    and with the payload size set to payload_size.'''
    data = get_test_data()
    set_u32(data, 12, payload_size)
    data.extend(i % 256 for i in range(trailer_size))
    return data

def embed_payload(data, payload, offset=TEST_PAYLOAD_OFFSET):
    '''Put payload at offset and set the payload size in the header'''
    data[offset:offset+len(payload)] = payload
    set_u32(data, 12, len(payload))
    return data

def build_image(payload, compression=magic.GZIP.data, payload_offset=HEADER_SIZE,
                trailer=b''):
    header = b'MZ' + b'\x00\x00' + b'zimg'
    header += struct.pack('<II', payload_offset, len(payload))
    header += b'\x00' * 8
    header += compression.ljust(32, b'\x00')
    header += magic.LINUX_MAGIC.data
    header += struct.pack('<I', 0x40)
    return header + b'\x00' * (payload_offset - len(header)) + payload + trailer

def kernel_image(arch_magic=magic.ARM.data, size=256):
    '''Something that looks like a kernel image with arch_magic at
    the architecture magic offset.'''
    image = bytearray(b'\xaa' * size)
    image[ARCH_MAGIC_OFFSET:ARCH_MAGIC_OFFSET+len(arch_magic)] = arch_magic
    return bytes(image)

def gzip_data(*strings):
    if not strings:
        strings = ("this is a test string",)
    return gzip.compress(b''.join(s.encode() if isinstance(s, str) else s for s in strings))

def short_input(data, advertised_size):
    '''An input file that claims to be larger than it is'''
    return OffsetInputFile(io.BytesIO(bytes(data)), 0, size=advertised_size)

@pytest.fixture
def default_log_level():
    '''Runs a test with the logger at its default level and puts the
    previous level back afterwards.'''
    level = log.level
    log.setLevel(logging.INFO)
    yield
    log.setLevel(level)
