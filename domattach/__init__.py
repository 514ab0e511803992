"""Attach disk inspection tools to libvirt domains."""

__version__ = '0.1.0'

from .attach import AccessRequest, Attachment, add_domain, add_libvirt_dom
from .domain import Domain, DiskDescriptor
from .drives import Drive, DriveList
from .policy import ConflictMode
from .session import Session
