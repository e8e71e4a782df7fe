"""
Call tree: the output of code generation, consumed by renderers

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
from collections import namedtuple

from dslgen import DslGenInternalException
from dslgen.codegen.context import ChainDecision

LITERAL_TYPES = (str, bool, int, float, type(None))


class Symbol(namedtuple("Symbol", ["name"])):
    """
    Reference to a constant of target language, rendered verbatim
    """

    def __str__(self):
        return self.name


class ChildCall(namedtuple("ChildCall", ["decision", "call"])):
    @property
    def chained(self):
        return self.decision == ChainDecision.CHAINED

    @property
    def nested(self):
        return self.decision == ChainDecision.NESTED


class CallNode(object):
    """
    Builder function call. Arguments go in order, options are fluent calls
    applied to the result, children attach either chained or nested.

    :type function_name: str
    :type args: list
    :type options: list[CallNode]
    :type children: list[ChildCall]
    """

    def __init__(self, function_name, args=(), options=(), children=(), is_noop=False):
        self.function_name = function_name
        self.args = tuple(args)
        self.options = tuple(options)
        self.children = tuple(children)
        self.is_noop = is_noop

        for arg in self.args:
            if not isinstance(arg, LITERAL_TYPES + (Symbol, CallNode)):
                msg = "Argument %r of %s is neither literal nor call"
                raise DslGenInternalException(msg % (arg, function_name))

        for child in self.children:
            if not isinstance(child, ChildCall):
                raise DslGenInternalException("Child %r of %s is not attached" % (child, function_name))

    @classmethod
    def noop(cls, children=()):
        return cls(None, children=children, is_noop=True)

    def effective_children(self):
        """
        Children with no-op calls replaced by their own children, in original order
        """
        for child in self.children:
            if child.call.is_noop:
                for grandchild in child.call.effective_children():
                    yield grandchild
            else:
                yield child

    def chained(self):
        return [child.call for child in self.effective_children() if child.chained]

    def nested(self):
        return [child.call for child in self.effective_children() if child.nested]

    def __eq__(self, other):
        if not isinstance(other, CallNode):
            return NotImplemented
        return (self.function_name, self.args, self.options, self.children, self.is_noop) == \
               (other.function_name, other.args, other.options, other.children, other.is_noop)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        if self.is_noop:
            return "<noop %s>" % list(self.children)
        return "%s(%s)" % (self.function_name, ", ".join(repr(arg) for arg in self.args))


class CallTree(object):
    """
    :type root: CallNode
    """

    def __init__(self, root):
        self.root = root

    def roots(self):
        """
        Top-level calls, root no-op is replaced by its children
        """
        if self.root.is_noop:
            return [child.call for child in self.root.effective_children()]
        return [self.root]

    def walk(self):
        """
        Depth-first traversal of effective calls: arguments, options, then children
        """
        for call in self.roots():
            for item in self._walk(call):
                yield item

    def _walk(self, call):
        yield call
        for arg in call.args:
            if isinstance(arg, CallNode):
                for item in self._walk(arg):
                    yield item
        for option in call.options:
            for item in self._walk(option):
                yield item
        for child in call.effective_children():
            for item in self._walk(child.call):
                yield item

    def visit(self, visitor):
        """
        :type visitor: callable
        """
        for call in self.walk():
            visitor(call)

    def calls(self):
        return list(self.walk())

    def function_names(self):
        return [call.function_name for call in self.walk()]
