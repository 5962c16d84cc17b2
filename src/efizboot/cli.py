#!/usr/bin/env python3

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

import pathlib
import sys
import zlib

import click
import rich
import rich.console
import rich.table

from . import EFIZBOOT_VERSION
from .configuration import ZbootConfig, load_config
from .log import log, set_debug
from .parsers.zboot.UnpackParser import ZbootUnpackParser, read_info, unpack_body
from .UnpackParserException import UnpackParserException, ConfigurationError

# gzip.BadGzipFile is an OSError
UNPACK_ERRORS = (UnpackParserException, ConfigurationError, OSError, EOFError, zlib.error)


def fail(message):
    print(f'error: {message}', file=sys.stderr)
    sys.exit(1)


def build_config(config_file, **flags):
    config = ZbootConfig()
    if config_file is not None:
        config = load_config(config_file)
    config = config.enable(**flags)
    set_debug(config.debug)
    return config


@click.group()
@click.version_option(EFIZBOOT_VERSION)
def app():
    pass


# efizboot unpack -i <input file> -o <output file>
@app.command(short_help='Extract the payload of a zboot image')
@click.option('-c', '--config', 'config_file', type=click.File('r'))
@click.option('-i', '--input', 'input_file', required=True,
              type=click.Path(path_type=pathlib.Path, exists=True, dir_okay=False),
              help='zboot image')
@click.option('-o', '--output', 'output_file', required=True,
              type=click.Path(path_type=pathlib.Path, dir_okay=False),
              help='file to write the payload to')
@click.option('--decompress', is_flag=True, help='decompress the payload')
@click.option('--debug', is_flag=True, help='enable debug mode')
def unpack(config_file, input_file, output_file, decompress, debug):
    '''Extracts the payload of INPUT_FILE and writes it to OUTPUT_FILE.
    '''
    try:
        config = build_config(config_file, parse_body=True, decompress=decompress, debug=debug)
        if config.debug:
            log.debug(f'cli:unpack: efizboot version {EFIZBOOT_VERSION}, {config}')

        with input_file.open('rb') as infile:
            boot_info = read_info(infile, config)

        # the output file is only created if there is something to write
        body, _ = unpack_body(boot_info, config)
        with output_file.open('wb') as outfile:
            outfile.write(body)
    except UNPACK_ERRORS as e:
        fail(e)
    if config.debug:
        log.debug(f'cli:unpack: wrote {len(body)} bytes to {output_file}')


# efizboot info <input file>
@app.command(short_help='Show the header of a zboot image')
@click.option('--debug', is_flag=True, help='enable debug mode')
@click.argument('path', type=click.Path(path_type=pathlib.Path, exists=True, dir_okay=False))
def info(debug, path):
    '''Decodes and checks the header of PATH and shows it.
    '''
    try:
        config = build_config(None, debug=debug)
        with path.open('rb') as infile:
            parser = ZbootUnpackParser(infile, 0, config)
            parser.parse_from_offset()
            parse_info = parser.write_info({})
    except UNPACK_ERRORS as e:
        fail(e)

    console = rich.console.Console()
    console.print(build_meta_table(path, parse_info))


def build_meta_table(path, parse_info):
    '''Construct a parser meta information table'''
    meta_table = rich.table.Table('', '', title='Parser data', show_lines=True,
                                  show_header=False)
    meta_table.add_row('File', f'{path}')
    meta_table.add_row('Parser', f'{parse_info.get("unpack_parser")}')
    meta_table.add_row('Labels', f'{", ".join(parse_info.get("labels", []))}')
    meta_table.add_row('Parsed size', f'{parse_info.get("size")}')
    for k, v in parse_info.get('metadata', {}).items():
        meta_table.add_row(k, f'{v}')
    return meta_table


if __name__ == "__main__":
    app()
