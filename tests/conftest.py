import pytest

from xmlfactory import domain_xml


class FakeDomain:
    """Stand-in for domattach.domain.Domain backed by static XML."""

    def __init__(self, xml, *, running=False, name='fake'):
        self.name = name
        self.xml = xml
        self.running = running
        self.dump_calls = 0

    def is_shutoff(self):
        return not self.running

    def dump_xml(self, *, inactive=False):
        self.dump_calls += 1
        return self.xml

    def list_disks(self, *, persistent=False):
        from domattach.domain.disks import iter_disks

        return list(iter_disks(self.dump_xml(inactive=persistent)))


@pytest.fixture
def make_domain():
    def factory(*devices, running=False, name='fake'):
        return FakeDomain(domain_xml(*devices), running=running, name=name)

    return factory


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv('DOMATTACH_CONFIG', str(tmp_path / 'missing.toml'))
    monkeypatch.delenv('DOMATTACH_LIBVIRT_URI', raising=False)
    monkeypatch.delenv('DOMATTACH_READONLY_DISK', raising=False)
    monkeypatch.delenv('DOMATTACH_LOG', raising=False)
    monkeypatch.delenv('LIBVIRT_DEFAULT_URI', raising=False)
