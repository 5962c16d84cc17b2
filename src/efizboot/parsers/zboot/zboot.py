# This is a generated file! Please edit source .ksy file and use kaitai-struct-compiler to rebuild

import kaitaistruct
from kaitaistruct import KaitaiStruct, KaitaiStream, BytesIO


if getattr(kaitaistruct, 'API_VERSION', (0, 9)) < (0, 9):
    raise Exception("Incompatible Kaitai Struct Python API: 0.9 or later is required, but you have %s" % (kaitaistruct.__version__))

class Zboot(KaitaiStruct):
    """Header of an EFI zboot image: a PE/COFF stub that carries a (compressed)
    Linux kernel image as its payload. The magic values are not validated
    here, the unpack parser checks them in a fixed order.
    
    .. seealso::
       Source - https://git.kernel.org/pub/scm/linux/kernel/git/torvalds/linux.git/tree/drivers/firmware/efi/libstub/zboot-header.S
    """
    def __init__(self, _io, _parent=None, _root=None):
        self._io = _io
        self._parent = _parent
        self._root = _root if _root else self
        self._read()

    def _read(self):
        self.msdos_magic = self._io.read_bytes(2)
        self.reserved0 = self._io.read_bytes(2)
        self.zimg = self._io.read_bytes(4)
        self.payload_offset = self._io.read_u4le()
        self.payload_size = self._io.read_u4le()
        self.reserved1 = self._io.read_bytes(8)
        self.compression_type = self._io.read_bytes(32)
        self.linux_magic = self._io.read_bytes(4)
        self.pe_header_offset = self._io.read_u4le()
