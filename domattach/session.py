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

"""Hypervisor session manager."""

__all__ = ['Session']

import logging
from contextlib import AbstractContextManager
from types import TracebackType

import libvirt

from .config import Config
from .domain import Domain
from .exceptions import DomainNotFoundError, HypervisorConnectionError


log = logging.getLogger(__name__)


def _ignore_errors(userdata, err) -> None:  # noqa: ARG001
    """Do not print libvirt errors to stderr, they are raised instead."""


class Session(AbstractContextManager):
    """
    Read-only hypervisor session context manager.

    .. code-block:: python

       with Session('qemu:///system') as session:
           domain = session.get_domain('debian12')
           print(domain.get_state())
    """

    def __init__(self, uri: str | None = None, config: Config | None = None):
        """
        Open read-only connection to hypervisor.

        :param uri: libvirt connection URI. If None the URI from
            configuration is used.
        :param config: :class:`Config` object. Loaded from default
            location if not set.
        :raise: :class:`HypervisorConnectionError`
        """
        self._uri = uri or (config or Config())['libvirt']['uri']
        libvirt.registerErrorHandler(_ignore_errors, ctx=None)
        log.debug('Connecting to %s', self._uri)
        try:
            self._connection = libvirt.openReadOnly(self._uri)
        except libvirt.libvirtError as e:
            raise HypervisorConnectionError(
                e.get_error_code(),
                e.get_error_domain(),
                e.get_error_message(),
            ) from e

    def __enter__(self):
        """Return Session object."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_traceback: TracebackType | None,
    ):
        """Close the connection when leaving the context."""
        self.close()

    @property
    def uri(self) -> str:
        """Libvirt connection URI."""
        return self._uri

    @property
    def connection(self) -> libvirt.virConnect:
        """Libvirt connection object."""
        return self._connection

    def close(self) -> None:
        """Close connection to libvirt daemon."""
        log.debug('Closing connection to %s', self._uri)
        self.connection.close()

    def get_domain(self, name: str, *, allow_uuid: bool = False) -> Domain:
        """
        Get domain by name or UUID.

        :param name: Domain name. If `allow_uuid` is True it may be
            domain UUID as well, UUID lookup is tried first.
        :param allow_uuid: Try to lookup domain by UUID.
        :raise: :class:`DomainNotFoundError`
        """
        if allow_uuid:
            try:
                domain = self.connection.lookupByUUIDString(name)
            except libvirt.libvirtError as e:
                log.debug("No domain with UUID '%s': %s", name, e)
            else:
                log.debug("Found domain by UUID '%s'", name)
                return Domain(domain)
        try:
            domain = self.connection.lookupByName(name)
        except libvirt.libvirtError as e:
            raise DomainNotFoundError(name, e.get_error_message()) from e
        log.debug("Found domain by name '%s'", name)
        return Domain(domain)
