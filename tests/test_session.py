"""Tests against libvirt built-in test driver, no daemon required."""

import pytest

from domattach.attach import add_domain
from domattach.domain import Domain, DomainState
from domattach.drives import DriveList
from domattach.exceptions import (
    DomainNotFoundError,
    HypervisorConnectionError,
    LiveModificationError,
    NoChannelError,
)
from domattach.session import Session


TEST_URI = 'test:///default'


def test_get_domain_by_name():
    with Session(TEST_URI) as session:
        domain = session.get_domain('test')
        assert isinstance(domain, Domain)
        assert domain.name == 'test'
        assert domain.get_state() == DomainState.RUNNING
        assert not domain.is_shutoff()


def test_get_domain_by_uuid():
    with Session(TEST_URI) as session:
        uuid = session.connection.lookupByName('test').UUIDString()
        domain = session.get_domain(uuid, allow_uuid=True)
        assert domain.name == 'test'
        assert str(domain.uuid) == uuid


def test_uuid_lookup_falls_back_to_name():
    with Session(TEST_URI) as session:
        assert session.get_domain('test', allow_uuid=True).name == 'test'


def test_uuid_not_used_without_allow_uuid():
    with Session(TEST_URI) as session:
        uuid = session.connection.lookupByName('test').UUIDString()
        with pytest.raises(DomainNotFoundError):
            session.get_domain(uuid)


def test_domain_not_found():
    with Session(TEST_URI) as session:
        with pytest.raises(DomainNotFoundError, match="no libvirt domain called 'missing'"):
            session.get_domain('missing', allow_uuid=True)


def test_connection_error(tmp_path):
    with pytest.raises(HypervisorConnectionError, match='could not connect to libvirt'):
        Session(f'test://{tmp_path}/missing.xml')


def test_uri_from_config(monkeypatch):
    monkeypatch.setenv('DOMATTACH_LIBVIRT_URI', TEST_URI)
    with Session() as session:
        assert session.uri == TEST_URI


def test_uri_from_libvirt_default(monkeypatch):
    monkeypatch.setenv('LIBVIRT_DEFAULT_URI', TEST_URI)
    with Session() as session:
        assert session.uri == TEST_URI
        assert session.get_domain('test').name == 'test'


def test_domain_xml_description():
    with Session(TEST_URI) as session:
        xml = session.get_domain('test').dump_xml()
        assert xml.startswith('<domain')


def test_add_running_domain_refused():
    with pytest.raises(LiveModificationError):
        add_domain(DriveList(), 'test', uri=TEST_URI)


def test_add_running_domain_live_without_channel():
    with pytest.raises(NoChannelError):
        add_domain(DriveList(), 'test', uri=TEST_URI, live=True)
