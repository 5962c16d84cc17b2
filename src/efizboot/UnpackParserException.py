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


class UnpackParserException(Exception):
    pass


class ConfigurationError(Exception):
    pass


class TruncatedInput(UnpackParserException):
    '''Not enough data to decode a fixed size structure.'''
    pass


class ContentMismatch(UnpackParserException):
    '''A magic field does not contain the bytes it should contain.
    Both byte sequences are kept so the caller can inspect them.
    '''
    def __init__(self, field, observed, expected):
        self.field = field
        self.observed = bytes(observed)
        self.expected = bytes(expected)
        super().__init__(f'{field} invalid data: {self.observed!r} != {self.expected!r}')


class InvalidPayloadBounds(UnpackParserException):
    pass


class ShortRead(UnpackParserException):
    def __init__(self, requested, obtained):
        self.requested = requested
        self.obtained = obtained
        super().__init__(f'short read: requested {requested} bytes, got {obtained}')


class UnknownCompressionType(UnpackParserException):
    def __init__(self, tag):
        self.tag = bytes(tag)
        super().__init__(f'unknown compression type: {self.tag!r}')


class PayloadTooShort(UnpackParserException):
    def __init__(self, length):
        self.length = length
        super().__init__(f'invalid response payload: {length}')


class UnknownArchitecture(UnpackParserException):
    def __init__(self, observed):
        self.observed = bytes(observed)
        super().__init__(f'unknown payload type: {self.observed!r}')


class EmptyBody(UnpackParserException):
    def __init__(self):
        super().__init__('no body')
