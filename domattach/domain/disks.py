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
Domain disks enumeration.

Disk devices are read from domain XML description. Disk source is in
``<source file=..>`` or ``<source dev=..>`` attribute depending on
``<disk type=..>``. Disks of other types (network, volume, etc.) and
disks without source are skipped silently.
"""

__all__ = ['DiskDescriptor', 'StorageKind', 'for_each_disk', 'iter_disks']

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from lxml import etree

from domattach.exceptions import NoDisksError
from domattach.utils import xml as xmlutil


log = logging.getLogger(__name__)


class StorageKind(StrEnum):
    """Supported disk storage types."""

    FILE = 'file'
    BLOCK = 'block'


_source_attributes = {
    StorageKind.FILE: './source/@file',
    StorageKind.BLOCK: './source/@dev',
}


@dataclass(frozen=True)
class DiskDescriptor:
    """Disk device described in domain XML."""

    path: str
    kind: StorageKind
    format: str | None = None  # noqa: A003
    readonly: bool = False
    target: str | None = None


class DescribedDomain(Protocol):
    """Anything that has a name and XML description."""

    name: str

    def dump_xml(self) -> str:
        """Return domain XML description."""


def _disk_from_node(node: etree._Element) -> DiskDescriptor | None:
    disk_type = xmlutil.first_value(node, './@type')
    try:
        kind = StorageKind(disk_type)
    except ValueError:
        log.debug("Skip disk with type=%s: unsupported disk type", disk_type)
        return None
    path = xmlutil.first_value(node, _source_attributes[kind])
    if not path:
        log.debug('Skip %s disk: no source path', kind)
        return None
    return DiskDescriptor(
        path=path,
        kind=kind,
        format=xmlutil.first_value(node, './driver/@type'),
        readonly=bool(node.xpath('./readonly')),
        target=xmlutil.first_value(node, './target/@dev'),
    )


def iter_disks(xml: str | etree._Element) -> Iterator[DiskDescriptor]:
    """
    Yield disks from domain XML description in document order.

    :param xml: Domain XML description as :class:`str` or lxml element.
    :raise: :class:`DescribeError` if XML cannot be parsed.
    """
    for node in xmlutil.parse(xml).xpath('//devices/disk'):
        disk = _disk_from_node(node)
        if disk is not None:
            yield disk


def for_each_disk(
    domain: DescribedDomain, visit: Callable[[DiskDescriptor], None]
) -> int:
    """
    Call `visit` once for each disk of domain.

    Domain XML is fetched once. If `visit` raises an exception the
    enumeration stops and the exception is propagated, remaining disks
    are not visited.

    :param domain: Domain object, see :class:`domattach.domain.Domain`.
    :param visit: Callback taking :class:`DiskDescriptor`.
    :return: Number of visited disks.
    :raise: :class:`DescribeError`, :class:`NoDisksError`
    """
    xml = xmlutil.parse(domain.dump_xml())
    count = 0
    for disk in iter_disks(xml):
        visit(disk)
        count += 1
    if count == 0:
        raise NoDisksError(domain.name)
    return count
