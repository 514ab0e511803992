import pytest

from domattach.config import Config
from domattach.exceptions import ConfigLoaderError


def test_defaults_without_file():
    config = Config()
    assert config['libvirt']['uri'] == 'qemu:///system'
    assert config['attach'] == {'readonly_disk': 'write', 'allow_uuid': False}
    assert config['log']['level'] is None


def test_defaults_not_shared_between_instances(tmp_path):
    path = tmp_path / 'domattach.toml'
    path.write_text("[libvirt]\nuri = 'qemu:///session'\n")
    assert Config(path)['libvirt']['uri'] == 'qemu:///session'
    assert Config()['libvirt']['uri'] == 'qemu:///system'


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / 'domattach.toml'
    path.write_text("[attach]\nreadonly_disk = 'ignore'\n\n[log]\nlevel = 'debug'\n")
    config = Config(path)
    assert config['attach'] == {'readonly_disk': 'ignore', 'allow_uuid': False}
    assert config['log']['level'] == 'debug'


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / 'other.toml'
    path.write_text("[attach]\nallow_uuid = true\n")
    monkeypatch.setenv('DOMATTACH_CONFIG', str(path))
    assert Config()['attach']['allow_uuid'] is True


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / 'domattach.toml'
    path.write_text("[libvirt]\nuri = 'qemu:///session'\n")
    monkeypatch.setenv('DOMATTACH_LIBVIRT_URI', 'test:///default')
    monkeypatch.setenv('DOMATTACH_READONLY_DISK', 'error')
    config = Config(path)
    assert config['libvirt']['uri'] == 'test:///default'
    assert config['attach']['readonly_disk'] == 'error'


def test_bad_toml(tmp_path):
    path = tmp_path / 'domattach.toml'
    path.write_text("[libvirt\n")
    with pytest.raises(ConfigLoaderError, match='Bad TOML syntax'):
        Config(path)


def test_unknown_readonly_disk_mode(tmp_path):
    path = tmp_path / 'domattach.toml'
    path.write_text("[attach]\nreadonly_disk = 'sometimes'\n")
    with pytest.raises(ConfigLoaderError, match='Invalid configuration'):
        Config(path)


def test_unknown_section(tmp_path):
    path = tmp_path / 'domattach.toml'
    path.write_text("[storage]\nimages = 'images'\n")
    with pytest.raises(ConfigLoaderError):
        Config(path)


def test_libvirt_default_uri(monkeypatch):
    monkeypatch.setenv('LIBVIRT_DEFAULT_URI', 'qemu:///session')
    assert Config()['libvirt']['uri'] == 'qemu:///session'


def test_libvirt_default_uri_below_file_and_env(tmp_path, monkeypatch):
    path = tmp_path / 'domattach.toml'
    path.write_text("[libvirt]\nuri = 'qemu+ssh://host/system'\n")
    monkeypatch.setenv('LIBVIRT_DEFAULT_URI', 'qemu:///session')
    assert Config(path)['libvirt']['uri'] == 'qemu+ssh://host/system'
    monkeypatch.setenv('DOMATTACH_LIBVIRT_URI', 'test:///default')
    assert Config(path)['libvirt']['uri'] == 'test:///default'


def test_readonly_disk_env_case_insensitive(monkeypatch):
    monkeypatch.setenv('DOMATTACH_READONLY_DISK', 'Read')
    assert Config()['attach']['readonly_disk'] == 'read'
