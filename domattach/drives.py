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

"""Drive list for disk inspection engine."""

__all__ = ['Drive', 'DriveList']

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from .exceptions import RegistrationError


log = logging.getLogger(__name__)

DEFAULT_ATTACH_METHOD = 'appliance'

_valid_option = re.compile(r'^[A-Za-z0-9_-]+$')


@dataclass(frozen=True)
class Drive:
    """Drive added to inspection engine."""

    path: str
    format: str | None = None  # noqa: A003
    readonly: bool = False
    iface: str | None = None


class DriveList:
    """
    Ordered list of drives.

    Drives are only appended. :meth:`checkpoint` and :meth:`rollback`
    allow to undo everything appended since the checkpoint, so a batch
    of drives is added either completely or not at all. This is a
    sequential undo log, do not share one list between concurrently
    running batches.
    """

    def __init__(self):
        """Initialise empty DriveList."""
        self._drives: list[Drive] = []
        self.attach_method = DEFAULT_ATTACH_METHOD

    def __len__(self) -> int:
        """Return number of drives."""
        return len(self._drives)

    def __iter__(self) -> Iterator[Drive]:
        """Iterate over drives in order of addition."""
        return iter(self._drives)

    def __getitem__(self, index: int) -> Drive:
        """Return drive by index."""
        return self._drives[index]

    def __repr__(self) -> str:
        """Return string representation."""
        return f'<DriveList drives={self._drives!r}>'

    def checkpoint(self) -> int:
        """Return current position of the list."""
        return len(self._drives)

    def rollback(self, ckp: int) -> None:
        """
        Remove all drives added after checkpoint.

        :param ckp: Value returned by :meth:`checkpoint`.
        """
        if ckp < 0 or ckp > len(self._drives):
            raise ValueError(f'Invalid drive list checkpoint: {ckp}')
        if ckp < len(self._drives):
            log.info(
                'Rolling back %s drive(s)', len(self._drives) - ckp
            )
        del self._drives[ckp:]

    def add_drive(
        self,
        path: str,
        *,
        format: str | None = None,  # noqa: A002
        readonly: bool = False,
        iface: str | None = None,
    ) -> Drive:
        """
        Add drive to the end of the list.

        Nothing is added if drive options are not valid.

        :param path: Path to disk image or block device.
        :param format: Disk image format e.g. `raw`, `qcow2`. If None
            the format is detected by inspection engine.
        :param readonly: Add drive in read-only mode.
        :param iface: Drive interface e.g. `virtio`, `ide`.
        :raise: :class:`RegistrationError`
        """
        if not path:
            raise RegistrationError('drive path must not be empty', path)
        if format is not None and not _valid_option.match(format):
            raise RegistrationError(
                f"invalid format '{format}'", path
            )
        if iface is not None and not _valid_option.match(iface):
            raise RegistrationError(f"invalid interface '{iface}'", path)
        drive = Drive(path, format=format, readonly=readonly, iface=iface)
        self._drives.append(drive)
        log.debug('Added drive %s', drive)
        return drive
