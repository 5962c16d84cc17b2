import pytest

from util import *
from efizboot import magic
from efizboot.magic import Datum, Architecture
from efizboot.UnpackParserException import ContentMismatch

def test_datum_values():
    assert magic.ARM.value == 'ARM'
    assert magic.MSDOS_MAGIC.value == 'MZ'
    assert magic.GZIP.value == 'gzip'
    assert magic.LINUX_MAGIC.value == 'Linux'

def test_datum_data():
    assert list(magic.ARM.data) == [65, 82, 77, 100]
    assert list(magic.RISC.data) == [82, 83, 67, 5]
    assert list(magic.MSDOS_MAGIC.data) == [77, 90]
    assert list(magic.ZIMG.data) == [122, 105, 109, 103]
    assert list(magic.LINUX_MAGIC.data) == [205, 35, 130, 129]
    assert list(magic.GZIP.data) == [103, 122, 105, 112] + [0] * 28
    assert len(magic.GZIP.data) == 32

def test_datum_data_is_stable():
    assert magic.GZIP.data is magic.GZIP.data
    assert Datum('gzip', padding=32).data == magic.GZIP.data
    assert Datum('gzip', padding=32) == magic.GZIP

def test_datum_is_frozen():
    with pytest.raises(AttributeError):
        magic.ARM.payload = 'XYZ'

def test_datum_padding_shorter_than_payload():
    assert Datum('zimg', padding=2).data == b'zimg'

def test_datum_single_mode():
    with pytest.raises(ValueError):
        Datum('gzip', padding=32, add_byte=1)
    with pytest.raises(ValueError):
        Datum('Linux', raw=b'\x01', add_byte=1)

def test_datum_matches():
    assert magic.ARM.matches(b'ARM\x64')
    assert magic.ARM.matches(bytearray(b'ARMd'))
    assert not magic.ARM.matches(b'ARM')
    assert not magic.RISC.matches(b'ARM\x64')

def test_check():
    magic.check('msdos_magic', b'MZ', magic.MSDOS_MAGIC)
    with pytest.raises(ContentMismatch) as cm:
        magic.check('msdos_magic', b'\x01Z', magic.MSDOS_MAGIC)
    assert cm.value.field == 'msdos_magic'
    assert cm.value.observed == b'\x01Z'
    assert cm.value.expected == b'MZ'
    # control bytes are visible in the message
    assert r"b'\x01Z' != b'MZ'" in str(cm.value)

def test_architecture_order():
    assert [a for _, a in magic.ARCHITECTURES] == [Architecture.ARM64, Architecture.RISCV]
    assert [d for d, _ in magic.ARCHITECTURES] == [magic.ARM, magic.RISC]
