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

"""CLI commands."""

import argparse
import logging

from domattach.attach import AccessRequest, add_libvirt_dom
from domattach.cli.term import Table
from domattach.drives import DriveList
from domattach.policy import ConflictMode
from domattach.session import Session


log = logging.getLogger(__name__)


def _yesno(value: bool) -> str:  # noqa: FBT001
    return 'yes' if value else 'no'


def disks(session: Session, args: argparse.Namespace) -> None:
    """
    List disks of domain.

    Only disks which can be added for inspection are listed: file and
    block devices with source path. Disks are listed in the same order
    as they appear in domain XML.
    """
    domain = session.get_domain(args.domain, allow_uuid=args.allow_uuid)
    table = Table()
    table.header = ['TARGET', 'TYPE', 'FORMAT', 'READONLY', 'PATH']
    for disk in domain.list_disks(persistent=args.persistent):
        table.add_row(
            [
                disk.target or '-',
                disk.kind,
                disk.format or '-',
                _yesno(disk.readonly),
                disk.path,
            ]
        )
    print(table)


def add(session: Session, args: argparse.Namespace) -> None:
    """
    Show drives which would be added for domain inspection.

    All disks of domain are resolved to drives according to requested
    access mode. Nothing is written to domain disks or domain config.

    Disks of running domain can be added only with --ro option. With
    --live option the guestfsd channel of running domain is used
    instead of disks.
    """
    domain = session.get_domain(args.domain, allow_uuid=args.allow_uuid)
    request = AccessRequest(
        readonly=args.ro,
        live=args.live,
        conflict_mode=ConflictMode.parse(args.readonly_disk),
        iface=args.iface,
    )
    drives = DriveList()
    attachment = add_libvirt_dom(drives, domain, request)
    if attachment.attach_method is not None:
        print(f'attach method: {attachment.attach_method}')
        return
    table = Table()
    table.header = ['PATH', 'FORMAT', 'READONLY', 'IFACE']
    for drive in drives:
        table.add_row(
            [
                drive.path,
                drive.format or '-',
                _yesno(drive.readonly),
                drive.iface or '-',
            ]
        )
    print(table)
