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

"""
Add disks of libvirt domain to drive list.

Typical usage:

.. code-block:: python

   from domattach import DriveList, add_domain

   drives = DriveList()
   add_domain(drives, 'debian12', readonly=True)
   for drive in drives:
       print(drive.path, drive.format, drive.readonly)
"""

__all__ = ['AccessRequest', 'Attachment', 'add_domain', 'add_libvirt_dom']

import logging
from dataclasses import dataclass
from typing import NamedTuple, Protocol

from .domain.channel import locate_channel
from .domain.disks import DiskDescriptor, for_each_disk
from .drives import DriveList
from .exceptions import (
    DiskConflictError,
    InvalidRequestError,
    LiveModificationError,
)
from .policy import Action, ConflictMode, resolve_readonly
from .session import Session


log = logging.getLogger(__name__)


class InspectedDomain(Protocol):
    """Domain interface required for adding disks."""

    name: str

    def is_shutoff(self) -> bool:
        """Return True if domain is shut off."""

    def dump_xml(self) -> str:
        """Return domain XML description."""


@dataclass(frozen=True)
class AccessRequest:
    """
    Requested domain access.

    :ivar readonly: Add all disks read-only.
    :ivar live: Connect to guestfsd if domain is running. Cannot be
        combined with `readonly`.
    :ivar conflict_mode: What to do with disks marked ``<readonly/>``
        if read-write access is requested.
    :ivar iface: Drive interface passed to every added drive.
    """

    readonly: bool = False
    live: bool = False
    conflict_mode: ConflictMode = ConflictMode.WRITE
    iface: str | None = None

    def validate(self) -> None:
        """Raise :class:`InvalidRequestError` if options conflict."""
        if self.readonly and self.live:
            raise InvalidRequestError(
                'you cannot set both live and readonly flags'
            )


class Attachment(NamedTuple):
    """
    Result of adding domain.

    `count` is a number of added drives. `attach_method` is set only
    when connected to running domain via guestfsd channel.
    """

    count: int
    attach_method: str | None = None


def add_libvirt_dom(
    drives: DriveList, domain: InspectedDomain, request: AccessRequest
) -> Attachment:
    """
    Add all disks of domain to drive list.

    Either all disks are added or the drive list is left untouched.
    Disks of running domain can be added only in read-only mode. With
    `live` request no disks are added, instead attach method of drive
    list is pointed to guestfsd channel of running domain.

    :param drives: Drive list to add disks to.
    :param domain: Domain object, see :class:`domattach.domain.Domain`.
    :param request: Requested access.
    :raise: :class:`InvalidRequestError`, :class:`LiveModificationError`,
        :class:`NoChannelError`, :class:`DescribeError`,
        :class:`NoDisksError`, :class:`DiskConflictError`,
        :class:`RegistrationError`
    """
    request.validate()
    if not request.readonly and not domain.is_shutoff():
        if request.live:
            attach_method = locate_channel(domain)
            drives.attach_method = attach_method
            return Attachment(0, attach_method)
        raise LiveModificationError(domain.name)

    added = []

    def add_disk(disk: DiskDescriptor) -> None:
        decision = resolve_readonly(
            request.readonly, disk.readonly, request.conflict_mode
        )
        match decision.action:
            case Action.SKIP:
                log.info('Skip read-only disk %s', disk.path)
            case Action.FAIL:
                raise DiskConflictError(disk.path)
            case Action.REGISTER:
                added.append(
                    drives.add_drive(
                        disk.path,
                        format=disk.format,
                        readonly=decision.readonly,
                        iface=request.iface,
                    )
                )

    ckp = drives.checkpoint()
    try:
        for_each_disk(domain, add_disk)
    except Exception:
        drives.rollback(ckp)
        raise
    log.info("Added %s disk(s) of domain '%s'", len(added), domain.name)
    return Attachment(len(added))


def add_domain(  # noqa: PLR0913
    drives: DriveList,
    name: str,
    *,
    uri: str | None = None,
    readonly: bool = False,
    live: bool = False,
    allow_uuid: bool = False,
    readonly_disk: str | ConflictMode | None = None,
    iface: str | None = None,
) -> Attachment:
    """
    Find libvirt domain by name or UUID and add its disks to drive list.

    :param drives: Drive list to add disks to.
    :param name: Domain name or UUID, see `allow_uuid`.
    :param uri: libvirt connection URI.
    :param readonly: Add disks read-only.
    :param live: Connect to guestfsd of running domain.
    :param allow_uuid: Try to lookup domain by UUID before name.
    :param readonly_disk: How to handle disks marked ``<readonly/>``:
        `error`, `read`, `write` (default) or `ignore`.
    :param iface: Drive interface.
    """
    request = AccessRequest(
        readonly=readonly,
        live=live,
        conflict_mode=ConflictMode.parse(readonly_disk or ConflictMode.WRITE),
        iface=iface,
    )
    request.validate()
    with Session(uri) as session:
        domain = session.get_domain(name, allow_uuid=allow_uuid)
        return add_libvirt_dom(drives, domain, request)
