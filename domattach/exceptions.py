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

"""Exceptions."""


class DomattachError(Exception):
    """Basic exception class."""


class ConfigLoaderError(DomattachError):
    """Something went wrong when loading configuration."""


class HypervisorConnectionError(DomattachError):
    """Cannot connect to libvirtd."""

    def __init__(self, code: int, domain: int, msg: str):
        """Initialise HypervisorConnectionError."""
        self.code = code
        self.domain = domain
        super().__init__(
            f'could not connect to libvirt (code {code}, domain {domain}): '
            f'{msg}'
        )


class DomainNotFoundError(DomattachError):
    """Domain not found by UUID nor by name."""

    def __init__(self, name: str, msg: str | None = None):
        """Initialise DomainNotFoundError."""
        self.name = name
        message = f"no libvirt domain called '{name}'"
        if msg:
            message += f': {msg}'
        super().__init__(message)


class InvalidRequestError(DomattachError):
    """Requested access options are not valid."""


class DescribeError(DomattachError):
    """Domain XML description is not available or cannot be parsed."""


class NoDisksError(DomattachError):
    """Domain has no recognisable disks."""

    def __init__(self, name: str):
        """Initialise NoDisksError."""
        self.name = name
        super().__init__(f"libvirt domain '{name}' has no disks")


class DiskConflictError(DomattachError):
    """Disk is marked read-only but read-write access was requested."""

    def __init__(self, path: str):
        """Initialise DiskConflictError."""
        self.path = path
        super().__init__(
            f'{path}: disk is marked <readonly/> in libvirt XML, '
            'and readonly disk mode was set to "error"'
        )


class LiveModificationError(DomattachError):
    """Refuse to write to the disks of a running domain."""

    def __init__(self, name: str):
        """Initialise LiveModificationError."""
        self.name = name
        super().__init__(
            f"domain '{name}' is a live virtual machine.\n"
            'Writing to the disks of a running virtual machine can cause '
            'disk corruption.\n'
            'Either use read-only access, or if the guest is running the '
            'guestfsd daemon specify live access.'
        )


class NoChannelError(DomattachError):
    """Domain has no channel for attaching to guestfsd."""

    def __init__(self, name: str):
        """Initialise NoChannelError."""
        self.name = name
        super().__init__(
            f"domain '{name}' has no libvirt <channel> definition "
            'for guestfsd'
        )


class RegistrationError(DomattachError):
    """Drive cannot be added to the drive list."""

    def __init__(self, msg: str, path: str):
        """Initialise RegistrationError."""
        self.path = path
        super().__init__(f'{path}: {msg}')
