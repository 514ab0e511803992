# This file is part of Domattach
#
# Domattach is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Domattach is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Domattach.  If not, see <http://www.gnu.org/licenses/>.

"""Command line argument parser."""

import argparse
import logging
import os
import sys
import textwrap
from collections.abc import Callable
from typing import NamedTuple

from domattach import __version__
from domattach.cli import commands
from domattach.config import Config
from domattach.exceptions import DomattachError
from domattach.policy import ConflictMode
from domattach.session import Session


log = logging.getLogger(__name__)
log_levels = [lv.lower() for lv in logging.getLevelNamesMapping()]


class Doc(NamedTuple):
    """Parsed docstring."""

    help: str  # noqa: A003
    desc: str


def get_doc(func: Callable) -> Doc:
    """Extract help message and description from function docstring."""
    doc = func.__doc__
    if isinstance(doc, str):
        doc = textwrap.dedent(doc).strip().split('\n\n')
        return Doc(doc[0][0].lower() + doc[0][1:], '\n\n'.join(doc))
    return Doc('', '')


def get_parser(config: Config | None = None) -> argparse.ArgumentParser:
    """
    Return command line argument parser.

    :param config: Defaults for command options are taken from config.
    """
    config = config or Config()
    root = argparse.ArgumentParser(
        prog='domattach',
        description='Attach disk inspection tools to libvirt domains.',
    )
    root.add_argument(
        '-V',
        '--version',
        action='version',
        version=__version__,
    )
    root.add_argument(
        '-c',
        '--connect',
        metavar='URI',
        help='libvirt connection URI',
    )
    root.add_argument(
        '-l',
        '--log-level',
        type=str.lower,
        choices=log_levels,
        metavar='LEVEL',
        help='log level',
    )

    # common options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('domain', help='domain name or UUID')
    common.add_argument(
        '-u',
        '--allow-uuid',
        action='store_true',
        default=config['attach']['allow_uuid'],
        help='lookup domain by UUID before name',
    )

    subparsers = root.add_subparsers(dest='command', metavar='COMMAND')

    # disks subcommand
    disks = subparsers.add_parser(
        'disks',
        parents=[common],
        formatter_class=argparse.RawTextHelpFormatter,
        help=get_doc(commands.disks).help,
        description=get_doc(commands.disks).desc,
    )
    disks.add_argument(
        '-p',
        '--persistent',
        action='store_true',
        default=False,
        help='display only persistent devices',
    )
    disks.set_defaults(func=commands.disks)

    # add subcommand
    add = subparsers.add_parser(
        'add',
        parents=[common],
        formatter_class=argparse.RawTextHelpFormatter,
        help=get_doc(commands.add).help,
        description=get_doc(commands.add).desc,
    )
    add_mode = add.add_mutually_exclusive_group()
    add_mode.add_argument(
        '--ro',
        action='store_true',
        default=False,
        help='add disks read-only',
    )
    add_mode.add_argument(
        '--live',
        action='store_true',
        default=False,
        help='connect to guestfsd if domain is running',
    )
    add.add_argument(
        '--readonly-disk',
        type=str.lower,
        choices=list(ConflictMode),
        default=config['attach']['readonly_disk'],
        metavar='MODE',
        help=(
            'what to do with disks marked <readonly/> in domain XML: '
            'error, read, write or ignore [default: %(default)s]'
        ),
    )
    add.add_argument(
        '--iface',
        help='drive interface e.g. virtio, ide',
    )
    add.set_defaults(func=commands.add)

    return root


def run() -> None:
    """Run argument parser."""
    try:
        config = Config()
    except DomattachError as e:
        sys.exit(f'error: {e}')
    parser = get_parser(config)
    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit()
    log_level = (
        args.log_level or os.getenv('DOMATTACH_LOG') or config['log']['level']
    )
    if isinstance(log_level, str) and log_level.lower() in log_levels:
        logging.basicConfig(
            level=logging.getLevelNamesMapping()[log_level.upper()]
        )
    log.debug('CLI started with args: %s', args)
    try:
        with Session(args.connect, config) as session:
            args.func(session, args)
    except DomattachError as e:
        sys.exit(f'error: {e}')
    except KeyboardInterrupt:
        sys.exit()
