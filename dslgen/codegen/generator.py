"""
Code generation entry point: configuration tree to call tree

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
from collections import namedtuple

from dslgen import GenerationError
from dslgen.codegen.builders import default_registry, builder_class
from dslgen.codegen.calls import CallTree
from dslgen.codegen.context import TraversalContext


class GenerationResult(namedtuple("GenerationResult", ["tree", "error"])):
    """
    Either call tree or the error which aborted generation, never both
    """

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        """
        :rtype: dslgen.codegen.calls.CallTree
        :raise GenerationError: when generation failed
        """
        if self.error is not None:
            raise self.error
        return self.tree


class CodeGenerator(object):
    """
    Walks configuration tree depth-first, building a call per node

    :type registry: dslgen.codegen.registry.BuilderRegistry
    """

    def __init__(self, registry=None, log=None):
        self.registry = registry if registry is not None else default_registry()
        if log is None:
            log = logging.getLogger(self.__class__.__name__)
        self.log = log
        self._builders = {}

    def build(self, node, context):
        """
        :type node: dslgen.model.ConfigurationNode
        :type context: TraversalContext
        :rtype: dslgen.codegen.calls.CallNode
        """
        cls = builder_class(node.element_type)
        if cls not in self._builders:
            self._builders[cls] = cls(self)
        self.log.debug("Building %s with %s", context.path, cls.__name__)
        return self._builders[cls].build(node, context)

    def generate(self, root):
        """
        :type root: dslgen.model.ConfigurationNode
        :rtype: GenerationResult
        """
        context = TraversalContext(self.registry, log=self.log.getChild("context")).descend(root)
        try:
            call = self.build(root, context)
        except GenerationError as exc:
            self.log.debug("Generation aborted: %s", exc)
            return GenerationResult(None, exc)

        tree = CallTree(call)
        self.log.debug("Generated %s calls", len(tree.calls()))
        return GenerationResult(tree, None)


def generate(root, registry=None):
    """
    :type root: dslgen.model.ConfigurationNode
    :type registry: dslgen.codegen.registry.BuilderRegistry
    :rtype: GenerationResult
    """
    return CodeGenerator(registry).generate(root)
