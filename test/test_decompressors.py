import pytest

from util import *
from efizboot import magic
from efizboot.decompressors import DecompressorCollection, default_decompressors, decompress
from efizboot.UnpackParserException import UnknownCompressionType

def test_default_decompressors():
    decompressors = default_decompressors()
    assert decompressors.names == ['gzip']

def test_default_decompressors_are_independent():
    d1 = default_decompressors()
    d1.add(magic.Datum('none', padding=32), lambda x: x)
    assert default_decompressors().names == ['gzip']

def test_decompress_gzip():
    assert decompress(magic.GZIP.data, gzip_data()) == b'this is a test string'

def test_decompress_unknown_tag():
    with pytest.raises(UnknownCompressionType) as cm:
        decompress(bytes(32), gzip_data())
    assert cm.value.tag == bytes(32)

def test_decompress_tag_compared_with_padding():
    # "gzip" without the NUL padding is not the gzip tag
    with pytest.raises(UnknownCompressionType):
        decompress(b'gzip', gzip_data())
    with pytest.raises(UnknownCompressionType):
        decompress(b'gzip'.ljust(32, b' '), gzip_data())

def test_decompress_invalid_header_is_not_wrapped():
    with pytest.raises(gzip.BadGzipFile):
        decompress(magic.GZIP.data, b'\x08')

def test_decompress_truncated_is_not_wrapped():
    with pytest.raises(EOFError):
        decompress(magic.GZIP.data, gzip_data()[:-12])

def test_lookup_first_match_wins():
    decompressors = DecompressorCollection()
    decompressors.add(magic.GZIP, lambda x: b'first')
    decompressors.add(magic.GZIP, lambda x: b'second')
    datum, function = decompressors.lookup(magic.GZIP.data)
    assert datum == magic.GZIP
    assert decompress(magic.GZIP.data, b'', decompressors) == b'first'

def test_extra_decompressor():
    decompressors = default_decompressors()
    identity = magic.Datum('none', padding=32)
    decompressors.add(identity, lambda x: bytes(x))
    assert decompress(identity.data, b'raw data', decompressors) == b'raw data'
    assert decompressors.names == ['gzip', 'none']

def test_clear():
    decompressors = default_decompressors()
    decompressors.clear()
    with pytest.raises(UnknownCompressionType):
        decompressors.lookup(magic.GZIP.data)
