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

"""Locate guestfsd channel for attaching to running domains."""

__all__ = ['GUESTFSD_CHANNEL', 'find_channel_path', 'locate_channel']

import logging

from lxml import etree

from domattach.exceptions import NoChannelError
from domattach.utils import xml as xmlutil

from .disks import DescribedDomain


log = logging.getLogger(__name__)

GUESTFSD_CHANNEL = 'org.libguestfs.channel.0'

_channel_xpath = (
    '//devices/channel['
    '@type="unix" and '
    './source/@mode="bind" and '
    './source/@path and '
    './target/@type="virtio" and '
    f'./target/@name="{GUESTFSD_CHANNEL}"'
    ']'
)


def find_channel_path(xml: str | etree._Element) -> str | None:
    """
    Return socket path of guestfsd channel or None if there is no one.

    If domain has several suitable channels the first one is used.

    :param xml: Domain XML description as :class:`str` or lxml element.
    """
    channels = xmlutil.parse(xml).xpath(_channel_xpath)
    if not channels:
        return None
    return xmlutil.first_value(channels[0], './source/@path')


def locate_channel(domain: DescribedDomain) -> str:
    """
    Return attach method for connecting to guestfsd in running domain.

    :param domain: Domain object, see :class:`domattach.domain.Domain`.
    :return: Attach method string e.g. ``unix:/path/to/socket``.
    :raise: :class:`NoChannelError`, :class:`DescribeError`
    """
    path = find_channel_path(domain.dump_xml())
    if path is None:
        raise NoChannelError(domain.name)
    log.info("Found guestfsd channel for domain '%s': %s", domain.name, path)
    return f'unix:{path}'
