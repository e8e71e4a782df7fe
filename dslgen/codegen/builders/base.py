"""
Base call builder: descriptor selection, parameter extraction, children traversal

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
from dslgen import UnsupportedExpressionError
from dslgen.codegen.calls import CallNode, ChildCall, Symbol
from dslgen.codegen.context import ScopeClass
from dslgen.codegen.params import extract, prune_defaults, as_argument, EqualsDefault, UnsupportedExpression
from dslgen.codegen.params import ParamSpec, ParamType
from dslgen.utils import is_blank

SAMPLE_SCOPE = "Sample.scope"
SCOPE_VARIABLE = "Scope.variable"
PARENT_SCOPE = "parent"
VARIABLE_SCOPE = "variable"
SCOPES = {"all": "ALL_SAMPLES", "children": "SUB_SAMPLES"}


def known_scope(node):
    """
    Predicate: sample scope is one the DSL can express
    """
    scope = node.get(SAMPLE_SCOPE)
    if is_blank(scope) or scope == PARENT_SCOPE or scope in SCOPES:
        return True
    return scope == VARIABLE_SCOPE and not is_blank(node.get(SCOPE_VARIABLE))


class CallBuilder(object):
    """
    Builds call for element kinds which need nothing but their descriptors.
    Subclasses serve specific element types and override the steps.

    :type generator: dslgen.codegen.generator.CodeGenerator
    """
    ELEMENT_TYPES = ()
    ENTRIES = ()  # types of collection entries consumed by builder instead of traversal

    def __init__(self, generator):
        self.generator = generator
        self.registry = generator.registry
        self.log = generator.log.getChild(self.__class__.__name__)

    def build(self, node, context):
        """
        :type node: dslgen.model.ConfigurationNode
        :type context: dslgen.codegen.context.TraversalContext
        :rtype: CallNode
        """
        descriptor = self.registry.select(node, context.path)
        if self.is_unreachable(context):
            self.log.warning("%s is outside of thread groups and never runs, skipping it", context.path)
            return CallNode.noop()

        values = [self.extract(node, param, context) for param in descriptor.params]
        options = self.build_options(node, descriptor, context)
        children = self.build_children(node, context)

        if self.is_noop(descriptor, values):
            self.log.debug("%s has no effect and is skipped", context.path)
            return CallNode.noop(children)

        args = [as_argument(value.value) for value in self.build_args(node, descriptor, values, context)]
        return CallNode(descriptor.function_name, args, options, children)

    def is_unreachable(self, context):
        """
        Samplers and controllers placed right into test plan are ignored by JMeter
        """
        if context.scope not in (ScopeClass.SAMPLER, ScopeClass.CONTROLLER):
            return False
        return context.nearest(ScopeClass.PLAN) is not None and context.nearest(ScopeClass.GROUP) is None

    def extract(self, node, param, context, raw_value=None):
        """
        :type param: dslgen.codegen.params.ParamSpec
        :param raw_value: value to use instead of node property
        :raise UnsupportedExpressionError: for JMeter expressions
        """
        if raw_value is None:
            raw_value = node.get(param.name)
        value = extract(raw_value, param, context.path)
        if isinstance(value, UnsupportedExpression):
            raise UnsupportedExpressionError(node.element_type, param.name, value.raw_text, context.path)
        return value

    def extract_raw(self, node, prop_name, context, param_type=ParamType.STRING):
        """
        Extract property which has no default in descriptor, e.g. entry fields
        """
        return self.extract(node, ParamSpec(prop_name, param_type, default=""), context).value

    def build_args(self, node, descriptor, values, context):
        """
        Positional arguments with trailing defaults dropped

        :type values: list
        :rtype: list
        """
        return prune_defaults(values, descriptor.min_args)

    def build_options(self, node, descriptor, context):
        options = []
        for option in descriptor.options:
            raw_value = node.get(option.param.name)
            if is_blank(raw_value):
                if option.absent is None:
                    continue
                self.log.warning("No %s found in %s, using default: %s", option.param.name, context.path,
                                 option.absent)
                raw_value = option.absent
            value = self.extract(node, option.param, context, raw_value)
            if isinstance(value, EqualsDefault):
                continue
            call = option.to_call(as_argument(value.value))
            if call is not None:
                options.append(call)
        return options

    def build_children(self, node, context):
        children = []
        for index, child in enumerate(node.children):
            if child.element_type in self.ENTRIES:
                continue
            call = self.generator.build(child, context.descend(child, index))
            decision = context.chain_or_nest(node, child.element_type)
            children.append(ChildCall(decision, call))
        return children

    def entries(self, node, entry_type):
        return [child for child in node.children if child.element_type == entry_type]

    def is_noop(self, descriptor, values):
        """
        All parameters are set to values which make element have no effect
        """
        params = descriptor.params
        if not params or any(param.noop is None for param in params):
            return False
        return all(param.is_noop(value) for param, value in zip(params, values))


class ScopedCallBuilder(CallBuilder):
    """
    Post-processors and assertions, which JMeter applies to main sample,
    its sub-samples or content of a variable
    """

    def build_options(self, node, descriptor, context):
        options = super(ScopedCallBuilder, self).build_options(node, descriptor, context)
        options.extend(self.build_scope(node, context))
        return options

    def build_scope(self, node, context):
        scope = node.get(SAMPLE_SCOPE)
        if is_blank(scope) or scope == PARENT_SCOPE:
            return []
        if scope == VARIABLE_SCOPE:
            return [CallNode("scopeVariable", [self.extract_raw(node, SCOPE_VARIABLE, context)])]
        return [CallNode("scope", [Symbol("DslScopedTestElement.Scope." + SCOPES[scope])])]
