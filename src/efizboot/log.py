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

import logging
import sys

log = logging.getLogger('efizboot')


class StderrHandler(logging.StreamHandler):
    '''Writes to sys.stderr as it is when a record is emitted, so
    replacing sys.stderr also redirects the log.'''
    def __init__(self):
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def set_debug(enabled):
    if enabled:
        log.setLevel(logging.DEBUG)
    else:
        log.setLevel(logging.INFO)


_handler = StderrHandler()
_handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
log.addHandler(_handler)
log.setLevel(logging.INFO)
