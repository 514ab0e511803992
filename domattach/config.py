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

"""Configuration loader."""

__all__ = ['Config', 'ConfigSchema']

import copy
import os
import tomllib
from collections import UserDict
from pathlib import Path
from typing import ClassVar

import pydantic

from .common import EntityModel
from .exceptions import ConfigLoaderError
from .policy import ConflictMode
from .utils import dictutil


class LibvirtConfigSchema(EntityModel):
    """Schema for libvirt config."""

    uri: str


class AttachConfigSchema(EntityModel):
    """Schema for default domain attach options."""

    readonly_disk: ConflictMode = ConflictMode.WRITE
    allow_uuid: bool = False


class LogConfigSchema(EntityModel):
    """Logger config schema."""

    level: str | None = None


class ConfigSchema(EntityModel):
    """Configuration file schema."""

    libvirt: LibvirtConfigSchema
    attach: AttachConfigSchema
    log: LogConfigSchema | None = None


class Config(UserDict):
    """
    UserDict for storing configuration.

    Environment variables prefix is ``DOMATTACH_``. Environment variables
    have higher priority than configuration file. If neither sets libvirt
    URI ``LIBVIRT_DEFAULT_URI`` is used before the built-in default.

    :cvar Path DEFAULT_CONFIG_FILE: :file:`/etc/domattach/domattach.toml`
    :cvar dict DEFAULT_CONFIGURATION:
    """

    DEFAULT_CONFIG_FILE = Path('/etc/domattach/domattach.toml')
    DEFAULT_CONFIGURATION: ClassVar[dict] = {
        'libvirt': {
            'uri': 'qemu:///system',
        },
        'attach': {
            'readonly_disk': 'write',
            'allow_uuid': False,
        },
        'log': {
            'level': None,
        },
    }

    def __init__(self, file: Path | None = None):
        """
        Initialise Config.

        :param file: Path to configuration file. If `file` is None
            use ``DOMATTACH_CONFIG`` environment variable or
            :var:`Config.DEFAULT_CONFIG_FILE`.
        """
        file = file or os.getenv('DOMATTACH_CONFIG')
        self.file = Path(file) if file else self.DEFAULT_CONFIG_FILE
        try:
            if self.file.exists():
                with self.file.open('rb') as configfile:
                    loaded = tomllib.load(configfile)
            else:
                loaded = {}
        except tomllib.TOMLDecodeError as etoml:
            raise ConfigLoaderError(
                f'Bad TOML syntax: {self.file}: {etoml}'
            ) from etoml
        except (OSError, ValueError) as eread:
            raise ConfigLoaderError(
                f'Config read error: {self.file}: {eread}'
            ) from eread
        config = dictutil.override(
            copy.deepcopy(self.DEFAULT_CONFIGURATION), loaded
        )
        if 'uri' not in loaded.get('libvirt', {}) and (
            default_uri := os.getenv('LIBVIRT_DEFAULT_URI')
        ):
            config['libvirt']['uri'] = default_uri
        if uri := os.getenv('DOMATTACH_LIBVIRT_URI'):
            config['libvirt']['uri'] = uri
        if readonly_disk := os.getenv('DOMATTACH_READONLY_DISK'):
            config['attach']['readonly_disk'] = readonly_disk.lower()
        try:
            ConfigSchema(**config)
        except pydantic.ValidationError as e:
            raise ConfigLoaderError(
                f'Invalid configuration: {self.file}: {e}'
            ) from e
        super().__init__(config)
