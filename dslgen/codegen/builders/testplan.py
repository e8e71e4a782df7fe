"""
Test plan and user defined variables

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
from dslgen.codegen.builders.base import CallBuilder
from dslgen.codegen.calls import CallNode, ChildCall
from dslgen.codegen.context import ScopeClass, ChainDecision
from dslgen.codegen.params import ParamSpec, ParamType
from dslgen.codegen.registry import BuilderDescriptor, OptionSpec

ARGUMENT = "Argument"

DESCRIPTORS = [
    BuilderDescriptor("TestPlan", "testPlan", scope=ScopeClass.PLAN, options=[
        OptionSpec("sequentialThreadGroups",
                   ParamSpec("TestPlan.serialize_threadgroups", ParamType.BOOL, default=False), flag=True),
    ]),
    BuilderDescriptor("Arguments", "vars"),
]


class VariablesMixin(object):
    def variable_setters(self, node, context):
        """
        .set(name, value) for every Argument entry
        """
        setters = []
        for argument in self.entries(node, ARGUMENT):
            name = self.extract_raw(argument, "Argument.name", context)
            value = self.extract_raw(argument, "Argument.value", context)
            setters.append(CallNode("set", [name, value]))
        return setters


class TestPlanBuilder(CallBuilder, VariablesMixin):
    """
    Variables declared in test plan itself become chained vars() element
    """
    ELEMENT_TYPES = ("TestPlan",)
    ENTRIES = (ARGUMENT,)

    def build_children(self, node, context):
        children = []
        setters = self.variable_setters(node, context)
        if setters:
            self.log.debug("Test plan declares %s variables", len(setters))
            children.append(ChildCall(ChainDecision.CHAINED, CallNode("vars", options=setters)))
        children.extend(super(TestPlanBuilder, self).build_children(node, context))
        return children


class VariablesBuilder(CallBuilder, VariablesMixin):
    ELEMENT_TYPES = ("Arguments",)
    ENTRIES = (ARGUMENT,)

    def build_options(self, node, descriptor, context):
        options = super(VariablesBuilder, self).build_options(node, descriptor, context)
        return options + self.variable_setters(node, context)
