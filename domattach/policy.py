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
Read-only policy for domain disks.

Decide how a single disk is registered when the caller's requested
access mode and the ``<readonly/>`` marker in libvirt XML disagree.
Asking for read-only access is always satisfiable. Only a read-write
request against a disk marked ``<readonly/>`` depends on
:class:`ConflictMode`:

ERROR
    Refuse to add the disk, the whole domain fails.

READ
    Add the disk read-only.

WRITE
    Add the disk read-write anyway. This is the default.

IGNORE
    Skip the disk.
"""

__all__ = ['Action', 'ConflictMode', 'Decision', 'resolve_readonly']

from enum import StrEnum
from typing import NamedTuple

from .exceptions import InvalidRequestError


class ConflictMode(StrEnum):
    """Readonly disk conflict resolution modes enumerated."""

    ERROR = 'error'
    READ = 'read'
    WRITE = 'write'
    IGNORE = 'ignore'

    @classmethod
    def parse(cls, value: 'str | ConflictMode') -> 'ConflictMode':
        """
        Return mode by its name.

        :param value: Mode name, case insensitive.
        :raise: :class:`InvalidRequestError`
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise InvalidRequestError(
                f"unknown readonly disk mode '{value}', valid modes are: "
                f'{", ".join(cls)}'
            ) from e


class Action(StrEnum):
    """What to do with a disk."""

    REGISTER = 'register'
    SKIP = 'skip'
    FAIL = 'fail'


class Decision(NamedTuple):
    """Policy decision for one disk."""

    action: Action
    readonly: bool = False


def resolve_readonly(
    requested_readonly: bool,
    declared_readonly: bool,
    mode: ConflictMode,
) -> Decision:
    """
    Return :class:`Decision` for one disk.

    :param requested_readonly: Caller asked for read-only access.
    :param declared_readonly: Disk is marked ``<readonly/>`` in XML.
    :param mode: Conflict resolution mode.
    """
    if requested_readonly:
        return Decision(Action.REGISTER, readonly=True)
    if not declared_readonly:
        return Decision(Action.REGISTER, readonly=False)
    match mode:
        case ConflictMode.ERROR:
            return Decision(Action.FAIL)
        case ConflictMode.READ:
            return Decision(Action.REGISTER, readonly=True)
        case ConflictMode.WRITE:
            return Decision(Action.REGISTER, readonly=False)
        case ConflictMode.IGNORE:
            return Decision(Action.SKIP)
    raise InvalidRequestError(f"unknown readonly disk mode '{mode}'")
