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

"""Manage libvirt domains."""

__all__ = ['Domain', 'DomainState']

import logging
from enum import IntEnum
from uuid import UUID

import libvirt

from domattach.exceptions import DescribeError

from .disks import DiskDescriptor, iter_disks


log = logging.getLogger(__name__)


class DomainState(IntEnum):
    """
    Domain states enumerated.

    Reference:
    https://libvirt.org/html/libvirt-libvirt-domain.html#virDomainState
    """

    NOSTATE = 0
    RUNNING = 1
    BLOCKED = 2
    PAUSED = 3
    SHUTDOWN = 4
    SHUTOFF = 5
    CRASHED = 6
    PMSUSPENDED = 7


class Domain:
    """Read-only view of libvirt domain."""

    def __init__(self, domain: libvirt.virDomain):
        """
        Initialise Domain object.

        :param domain: libvirt domain object
        """
        self._domain = domain
        self._name = domain.name()

    def __repr__(self) -> str:
        """Return string representation."""
        return f'<Domain name={self._name!r}>'

    @property
    def domain(self) -> libvirt.virDomain:
        """Libvirt domain object."""
        return self._domain

    @property
    def name(self) -> str:
        """Domain name."""
        return self._name

    @property
    def uuid(self) -> UUID:
        """Domain UUID."""
        return UUID(bytes=self.domain.UUID())

    def get_state(self) -> DomainState:
        """Return domain state: RUNNING, SHUTOFF, etc."""
        try:
            info = self.domain.info()
        except libvirt.libvirtError as e:
            raise DescribeError(
                f"error getting info of domain '{self.name}': "
                f'{e.get_error_message()}'
            ) from e
        try:
            return DomainState(info[0])
        except ValueError:
            log.warning(
                "Unknown state %s of domain '%s'", info[0], self.name
            )
            return DomainState.NOSTATE

    def is_shutoff(self) -> bool:
        """
        Return True if domain is shut off.

        Domain in any other state (running, paused, crashed, etc.) may
        keep its disks open.
        """
        return self.get_state() == DomainState.SHUTOFF

    def dump_xml(self, *, inactive: bool = False) -> str:
        """Return domain XML description."""
        flags = libvirt.VIR_DOMAIN_XML_INACTIVE if inactive else 0
        try:
            return self.domain.XMLDesc(flags)
        except libvirt.libvirtError as e:
            raise DescribeError(
                f"error reading libvirt XML information of domain "
                f"'{self.name}': {e.get_error_message()}"
            ) from e

    def list_disks(self, *, persistent: bool = False) -> list[DiskDescriptor]:
        """
        Return list of recognised disks in document order.

        :param persistent: If True list only persistent disks described
            in domain XML config.
        """
        return list(iter_disks(self.dump_xml(inactive=persistent)))
