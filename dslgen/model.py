"""
Configuration element tree, the input of code generation

Copyright 2017 BlazeMeter Inc.

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
from types import MappingProxyType

TESTNAME = "testname"
GUICLASS = "guiclass"
TESTCLASS = "testclass"

# element attributes which describe GUI presentation only
META_PROPERTIES = (GUICLASS, TESTCLASS)


class ConfigurationNode(object):
    """
    One element of a test plan: typed raw properties and ordered children

    :type element_type: str
    :type properties: dict[str,str|int|float|bool]
    :type children: list[ConfigurationNode]
    """
    __slots__ = ("element_type", "properties", "children")

    def __init__(self, element_type, properties=None, children=()):
        object.__setattr__(self, "element_type", element_type)
        object.__setattr__(self, "properties", MappingProxyType(dict(properties or {})))
        object.__setattr__(self, "children", tuple(children))

    def __setattr__(self, key, value):
        raise AttributeError("%s is immutable" % self.__class__.__name__)

    @property
    def name(self):
        return self.properties.get(TESTNAME)

    def get(self, prop_name, default=None):
        return self.properties.get(prop_name, default)

    def significant_properties(self):
        return set(prop for prop in self.properties if prop not in META_PROPERTIES)

    def __eq__(self, other):
        if not isinstance(other, ConfigurationNode):
            return NotImplemented
        return (self.element_type == other.element_type and
                dict(self.properties) == dict(other.properties) and
                self.children == other.children)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        if self.name:
            return "%s[%s]" % (self.element_type, self.name)
        return self.element_type
