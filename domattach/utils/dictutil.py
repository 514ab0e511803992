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

"""Dict tools."""


def override(a: dict, b: dict) -> dict:
    """
    Override dict `a` by `b` values.

    Keys that not exists in `a`, but exists in `b` will be
    appended to `a`.

    .. code-block:: shell-session

       >>> from domattach.utils import dictutil
       >>> default = {
       ...     'libvirt': {'uri': 'qemu:///system'},
       ...     'attach': {'readonly_disk': 'write', 'allow_uuid': False},
       ... }
       >>> user = {'attach': {'allow_uuid': True}}
       >>> dictutil.override(default, user)
       {'libvirt': {'uri': 'qemu:///system'},
       'attach': {'readonly_disk': 'write', 'allow_uuid': True}}

    NOTE: merging dicts contained in lists is not supported.

    :param a: Dict to be overwritten.
    :param b: A dict whose values will be used to rewrite dict `a`.
    :return: Modified `a` dict.
    """
    for key in b:
        if key in a:
            if isinstance(a[key], dict) and isinstance(b[key], dict):
                override(a[key], b[key])
            else:
                a[key] = b[key]  # replace existing key's values
        else:
            a[key] = b[key]
    return a
