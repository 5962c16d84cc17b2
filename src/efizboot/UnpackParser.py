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

import io
import os

from .UnpackParserException import UnpackParserException


class OffsetInputFile:
    '''Wraps a seekable binary file so that position 0 is at offset.
    The size is taken from the file itself unless it is passed in.'''
    def __init__(self, infile, offset, size=None):
        self.infile = infile
        self.offset = offset
        if size is None:
            current = infile.tell()
            size = infile.seek(0, os.SEEK_END)
            infile.seek(current)
        self._size = size

    def __getattr__(self, name):
        return getattr(self.infile, name)

    def seek(self, offset, whence=os.SEEK_SET):
        if whence == os.SEEK_SET:
            return self.infile.seek(offset + self.offset, whence) - self.offset
        return self.infile.seek(offset, whence) - self.offset

    def tell(self):
        return self.infile.tell() - self.offset

    @property
    def size(self):
        return self._size - self.offset


def open_input(source, offset=0):
    '''Returns an OffsetInputFile for source, which is either a bytes-like
    object or a binary file object that is already open.'''
    if source is None:
        raise UnpackParserException('no input')
    if isinstance(source, OffsetInputFile):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = io.BytesIO(source)
    return OffsetInputFile(source, offset)


class UnpackParser:
    """The UnpackParser class can parse input according to a certain format,
    and unpack any content from it if necessary.

    You can make an UnpackParser by deriving a class from UnpackParser and
    defining:

    pretty_name:
        a name of the file type, used in logs and in the recorded
        information. There is no default.

    Override any methods if necessary.
    """
    pretty_name = None

    labels = []
    metadata = {}

    def __init__(self, infile, offset=0, configuration=None):
        '''Creates an UnpackParser that will read from infile, starting at
        offset. infile can also be a bytes-like object.'''
        self.offset = offset
        self.infile = open_input(infile, offset)
        self.configuration = configuration

    def parse(self):
        """Override this method to implement parsing the file data. If there is
        an error during the parsing, you should raise an UnpackParserException.
        """
        raise UnpackParserException("%s: undefined parse method" % self.__class__.__name__)

    def parse_from_offset(self):
        """Parses the data from the input file, starting from offset.
        Normally you do not need to override this.
        """
        self.infile.seek(0)
        self.parse()
        self.calculate_unpacked_size()
        check_condition(self.unpacked_size > 0, 'Parser resulted in zero length file')

    def calculate_unpacked_size(self):
        """Override this to calculate the length of the file data that is
        parsed, if the parse method does not read the entire content.
        You must assign the length to self.unpacked_size.
        """
        self.unpacked_size = self.infile.tell()

    @property
    def parsed_size(self):
        return self.unpacked_size

    def unpack(self, outfile):
        """Override this method to write any unpacked data to outfile.
        Returns the number of bytes written.
        """
        return 0

    def write_info(self, info):
        '''update the info dictionary with the parser results.
        Be aware that info may contain data already!
        '''
        self.record_parser(info)
        self.record_size(info)
        self.record_offset(info)
        self.add_labels(info)
        self.update_metadata(info)
        return info

    def record_parser(self, info):
        info['unpack_parser'] = self.pretty_name

    def record_size(self, info):
        info['size'] = self.parsed_size

    def record_offset(self, info):
        info['offset'] = self.offset

    def add_labels(self, info):
        info.setdefault('labels', []).extend(sorted(set(self.labels)))

    def update_metadata(self, info):
        info.setdefault('metadata', {}).update(self.metadata)


def check_condition(condition, message, exception=UnpackParserException):
    '''semantic check function to see if condition is True.
    Raises exception (an UnpackParserException by default) with message if not.
    '''
    if not condition:
        raise exception(message)
