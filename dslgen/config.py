"""
Generator settings

Copyright 2019 BlazeMeter Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""
import codecs
import json
import logging
import os

import yaml

from dslgen import DslGenConfigError
from dslgen.utils import BetterDict, RESOURCES_DIR

BASE_CONFIG = os.path.join(RESOURCES_DIR, "base-config.yml")

SETTINGS = "settings"
RENDERER = "renderer"


class Configuration(BetterDict):
    """
    loading both JSONs and YAMLs, later files override earlier ones
    """

    def __init__(self, *args, **kwargs):
        super(Configuration, self).__init__(*args, **kwargs)
        self.log = logging.getLogger('')

    @classmethod
    def with_defaults(cls, config_files=()):
        """
        Base config merged with user-supplied files

        :type config_files: list[str]
        :rtype: Configuration
        """
        config = cls()
        config.load([BASE_CONFIG] + list(config_files))
        return config

    def load(self, config_files, callback=None):
        """
        Load and merge JSON/YAML files into current dict

        :type callback: callable
        :type config_files: list[str]
        """
        self.log.debug("Configs: %s", config_files)
        for config_file in config_files:
            try:
                configs = []
                with codecs.open(config_file, 'r', encoding='utf-8') as fds:
                    contents = fds.read()

                self._read_yaml_or_json(config_file, configs, contents)

                for config in configs:
                    self.merge(config)

            except KeyboardInterrupt:
                raise
            except DslGenConfigError:
                raise
            except BaseException as exc:
                raise DslGenConfigError("Error when reading config file '%s': %s" % (config_file, exc))

            if callback is not None:
                callback(config_file)

    def _read_yaml_or_json(self, config_file, configs, contents):
        try:
            self.log.debug("Reading %s as YAML", config_file)
            yaml_documents = list(yaml.safe_load_all(contents))
            for doc in yaml_documents:
                if doc is None:
                    continue
                if not isinstance(doc, dict):
                    raise DslGenConfigError("Configuration %s is invalid" % config_file)
                configs.append(doc)
        except KeyboardInterrupt:
            raise
        except DslGenConfigError:
            raise
        except BaseException as yaml_load_exc:
            self.log.debug("Cannot read config file as YAML '%s': %s", config_file, yaml_load_exc)
            if contents.lstrip().startswith('{'):
                self.log.debug("Reading %s as JSON", config_file)
                config_value = json.loads(contents)
                if not isinstance(config_value, dict):
                    raise DslGenConfigError("Configuration %s in invalid" % config_file)
                configs.append(config_value)
            else:
                raise
