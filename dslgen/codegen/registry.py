"""
Static catalog of DSL builder descriptors and selection among them

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
import logging
from collections import OrderedDict

from dslgen import DslGenInternalException, NoBuilderFoundError
from dslgen.codegen.calls import CallNode
from dslgen.codegen.context import ScopeClass
from dslgen.model import TESTNAME
from dslgen.utils import is_blank


def prop_is(name, *values):
    """
    Predicate: raw property equals one of values, compared as lowercase text
    """
    expected = [str(value).lower() for value in values]

    def predicate(node):
        raw = node.get(name)
        return raw is not None and str(raw).strip().lower() in expected

    return predicate


def prop_blank(name):
    return lambda node: is_blank(node.get(name))


def prop_not_blank(name):
    return lambda node: not is_blank(node.get(name))


def named(default_name):
    """
    Predicate: element carries a name other than the one JMeter GUI gives by default
    """
    return lambda node: not is_blank(node.get(TESTNAME)) and node.get(TESTNAME) != default_name


def negate(predicate):
    return lambda node: not predicate(node)


def all_of(*predicates):
    return lambda node: all(predicate(node) for predicate in predicates)


class OptionSpec(object):
    """
    Fluent call applied to built element, like .method("POST")

    :type param: dslgen.codegen.params.ParamSpec
    :param flag: call takes no arguments and is emitted when value is true
    :param absent: raw value JMeter assumes when property is missing or blank,
                   None means option is skipped then
    """

    def __init__(self, method, param, flag=False, absent=None):
        self.method = method
        self.param = param
        self.flag = flag
        self.absent = absent

    def to_call(self, value, args=None):
        if self.flag:
            return CallNode(self.method) if value else None
        if args is None:
            args = [value]
        return CallNode(self.method, args)

    def __repr__(self):
        return ".%s(%s)" % (self.method, self.param.name)


class BuilderDescriptor(object):
    """
    How one element kind maps to one builder function call

    :type params: list[dslgen.codegen.params.ParamSpec]
    :type options: list[OptionSpec]
    :param consumes: names of properties used by builder besides params and options
    :param applies: predicate telling if descriptor can represent given node
    :param min_args: leading arguments emitted even when equal to defaults
    """

    def __init__(self, element_type, function_name, params=(), options=(), consumes=(), applies=None,
                 min_args=0, scope=ScopeClass.ELEMENT):
        self.element_type = element_type
        self.function_name = function_name
        self.params = tuple(params)
        self.options = tuple(options)
        self.consumes = tuple(consumes)
        self.applies = applies
        self.min_args = min_args
        self.scope = scope

    def is_applicable(self, node):
        if self.applies is None:
            return True
        return bool(self.applies(node))

    def consumed_properties(self):
        consumed = set(self.consumes)
        consumed.update(param.name for param in self.params)
        consumed.update(option.param.name for option in self.options)
        return consumed

    def unused_properties(self, node):
        """
        :type node: dslgen.model.ConfigurationNode
        :rtype: set[str]
        """
        return node.significant_properties() - self.consumed_properties()

    def __repr__(self):
        return "%s(%s)" % (self.function_name, ", ".join(param.name for param in self.params))


class BuilderRegistry(object):
    """
    Registration order matters: it is the last resort when choosing among applicable descriptors
    """

    def __init__(self, descriptors=()):
        self.log = logging.getLogger(self.__class__.__name__)
        self._descriptors = OrderedDict()
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor):
        """
        :type descriptor: BuilderDescriptor
        """
        existing = self._descriptors.setdefault(descriptor.element_type, [])
        if existing and existing[0].scope != descriptor.scope:
            msg = "Descriptor %r declares %s scope while %s has %s"
            raise DslGenInternalException(msg % (descriptor, ScopeClass.name(descriptor.scope),
                                                 descriptor.element_type, ScopeClass.name(existing[0].scope)))
        existing.append(descriptor)

    def element_types(self):
        return list(self._descriptors.keys())

    def candidates(self, element_type):
        return list(self._descriptors.get(element_type, []))

    def scope_of(self, element_type):
        candidates = self._descriptors.get(element_type)
        if not candidates:
            return ScopeClass.ELEMENT
        return candidates[0].scope

    def select(self, node, path=None):
        """
        Choose descriptor for node: applicable ones with fewest unused properties win,
        registration order breaks ties

        :type node: dslgen.model.ConfigurationNode
        :rtype: BuilderDescriptor
        :raise NoBuilderFoundError:
        """
        candidates = self.candidates(node.element_type)
        if not candidates:
            raise NoBuilderFoundError(node.element_type, path)

        applicable = [(len(desc.unused_properties(node)), idx, desc)
                      for idx, desc in enumerate(candidates) if desc.is_applicable(node)]
        if not applicable:
            reason = "none of %s builders fits its properties" % len(candidates)
            raise NoBuilderFoundError(node.element_type, path, reason=reason)

        _, _, chosen = min(applicable, key=lambda item: item[:2])
        self.log.debug("Chose %r for %r among %s candidates", chosen, node, len(applicable))
        return chosen
