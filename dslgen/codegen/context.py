"""
Traversal context: what encloses the element being built

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


class ScopeClass(object):
    """
    Breadth of test plan an element kind applies to, wider has bigger value

    ELEMENT kinds (timers, assertions, config elements...) have no scope of their own,
    they apply to everything in the scope of the element they are declared in.
    """
    ELEMENT = 0
    SAMPLER = 1
    CONTROLLER = 2
    GROUP = 3
    PLAN = 4

    NAMES = {ELEMENT: "element", SAMPLER: "sampler", CONTROLLER: "controller", GROUP: "group", PLAN: "plan"}

    @classmethod
    def opens_scope(cls, scope):
        return scope != cls.ELEMENT

    @classmethod
    def name(cls, scope):
        return cls.NAMES.get(scope, str(scope))


class ChainDecision(object):
    CHAINED = "chained"
    NESTED = "nested"


class TraversalContext(object):
    """
    One frame of depth-first traversal. Frames are never changed,
    descending creates a new frame pointing to its parent.

    :type registry: dslgen.codegen.registry.BuilderRegistry
    :type node: dslgen.model.ConfigurationNode
    :type parent: TraversalContext
    :param index: position of node among its siblings
    """

    def __init__(self, registry, node=None, parent=None, index=0, log=None):
        self.registry = registry
        self.node = node
        self.parent = parent
        self.index = index
        if log is None:
            log = logging.getLogger(self.__class__.__name__)
        self.log = log

    def descend(self, node, index=0):
        return TraversalContext(self.registry, node=node, parent=self, index=index, log=self.log)

    def frames(self):
        """
        Frames with nodes from this one up to the root, closest first
        """
        frame = self
        while frame is not None and frame.node is not None:
            yield frame
            frame = frame.parent

    def ancestors(self):
        """
        Enclosing nodes, closest first
        """
        for frame in self.frames():
            if frame is not self:
                yield frame.node

    @property
    def label(self):
        """
        Unnamed elements are told apart by their position among siblings
        """
        if self.node.name or self.parent is None or self.parent.node is None:
            return repr(self.node)
        return "%s#%s" % (self.node.element_type, self.index + 1)

    @property
    def path(self):
        labels = [frame.label for frame in self.frames()]
        labels.reverse()
        return "/".join(labels)

    @property
    def scope(self):
        return self.registry.scope_of(self.node.element_type)

    def nearest(self, scope):
        """
        Closest enclosing node of given scope class

        :rtype: dslgen.model.ConfigurationNode
        """
        for node in self.ancestors():
            if self.registry.scope_of(node.element_type) == scope:
                return node
        return None

    def chain_or_nest(self, parent_node, child_element_type):
        """
        Decide how a child call gets attached to its parent call

        :type parent_node: dslgen.model.ConfigurationNode
        :type child_element_type: str
        :return: ChainDecision value
        """
        child_scope = self.registry.scope_of(child_element_type)
        if not ScopeClass.opens_scope(child_scope):
            return ChainDecision.CHAINED

        parent_scope = self.registry.scope_of(parent_node.element_type)
        if child_scope > parent_scope:
            msg = "%s opens %s scope which is wider than %s scope of its parent %r"
            self.log.warning(msg, child_element_type, ScopeClass.name(child_scope),
                             ScopeClass.name(parent_scope), parent_node)

        return ChainDecision.NESTED
