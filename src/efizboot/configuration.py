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

# import YAML module for the configuration
from yaml import load
from yaml import YAMLError
try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader

from .UnpackParserException import ConfigurationError


@dataclass(frozen=True)
class ZbootConfig:
    parse_body: bool = False
    decompress: bool = False
    debug: bool = False

    @classmethod
    def from_dict(cls, config):
        if config is None:
            return cls()
        if not isinstance(config, dict):
            raise ConfigurationError('configuration should be a mapping')

        known = {f.name for f in dataclasses.fields(cls)}
        for key, value in config.items():
            if key not in known:
                raise ConfigurationError(f'unknown configuration option: {key}')
            if not isinstance(value, bool):
                raise ConfigurationError(f'configuration option {key} should be true or false')
        return cls(**config)

    def enable(self, **flags):
        '''Returns a copy with every option in flags that is True switched on.
        Options that are already on stay on.'''
        return dataclasses.replace(self, **{k: True for k, v in flags.items() if v})


def load_config(config_file):
    '''read the configuration file. This is in YAML format'''
    try:
        config = load(config_file, Loader=Loader)
    except (YAMLError, UnicodeDecodeError) as e:
        raise ConfigurationError(f'cannot parse configuration file: {e}')
    return ZbootConfig.from_dict(config)
