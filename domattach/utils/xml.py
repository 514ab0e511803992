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

"""Helpers for querying libvirt XML descriptions."""

from lxml import etree

from domattach.exceptions import DescribeError


def parse(xml: str | etree._Element) -> etree._Element:
    """
    Return root element of XML description.

    Already parsed elements are returned as is.

    :param xml: XML document as :class:`str` or lxml element.
    :raise: :class:`DescribeError`
    """
    if isinstance(xml, etree._Element):  # noqa: SLF001
        return xml
    try:
        return etree.fromstring(xml)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise DescribeError(
            f'unable to parse XML information returned by libvirt: {e}'
        ) from e


def first_value(node: etree._Element, path: str) -> str | None:
    """
    Evaluate XPath expression in `node` context and return first result.

    Intended for attribute queries e.g. ``./source/@file``. Return None
    if nothing is found.
    """
    result = node.xpath(path)
    if not result:
        return None
    return str(result[0])
