"""
Logic controllers

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
from dslgen.codegen.context import ScopeClass
from dslgen.codegen.params import ParamSpec, ParamType
from dslgen.codegen.registry import BuilderDescriptor, OptionSpec, named, all_of, negate, prop_is, prop_blank
from dslgen.model import TESTNAME


def _controller(element_type, function_name, default_name, params=(), applies=None, **kwargs):
    """
    Pair of descriptors: one taking element name first, used when name was changed in GUI
    """
    name = ParamSpec(TESTNAME, default=default_name)
    with_name = named(default_name) if applies is None else all_of(named(default_name), applies)
    return [
        BuilderDescriptor(element_type, function_name, [name] + list(params), applies=with_name,
                          min_args=1, scope=ScopeClass.CONTROLLER, **kwargs),
        BuilderDescriptor(element_type, function_name, params, applies=applies, scope=ScopeClass.CONTROLLER,
                          **kwargs),
    ]


DESCRIPTORS = []
DESCRIPTORS += _controller("LoopController", "forLoopController", "Loop Controller",
                           [ParamSpec("LoopController.loops", ParamType.INT)],
                           consumes=["LoopController.continue_forever"])
DESCRIPTORS += _controller("WhileController", "whileController", "While Controller",
                           [ParamSpec("WhileController.condition")])
DESCRIPTORS += _controller("IfController", "ifController", "If Controller",
                           [ParamSpec("IfController.condition")],
                           consumes=["IfController.evaluateAll", "IfController.useExpression"],
                           applies=all_of(prop_is("IfController.useExpression", "true"),
                                          negate(prop_is("IfController.evaluateAll", "true"))))
DESCRIPTORS += _controller("ForeachController", "forEachController", "ForEach Controller",
                           [ParamSpec("ForeachController.inputVal"), ParamSpec("ForeachController.returnVal")],
                           consumes=["ForeachController.useSeparator", "ForeachController.startIndex",
                                     "ForeachController.endIndex"],
                           applies=all_of(negate(prop_is("ForeachController.useSeparator", "false")),
                                          prop_blank("ForeachController.startIndex"),
                                          prop_blank("ForeachController.endIndex")))
DESCRIPTORS += _controller("GenericController", "simpleController", "Simple Controller")

# transaction name is mandatory in DSL
DESCRIPTORS.append(BuilderDescriptor(
    "TransactionController", "transaction", [ParamSpec(TESTNAME, default="Transaction Controller")], min_args=1,
    scope=ScopeClass.CONTROLLER, options=[
        OptionSpec("includeTimersAndProcessorsTime",
                   ParamSpec("TransactionController.includeTimers", ParamType.BOOL, default=False), flag=True),
        OptionSpec("generateParentSample",
                   ParamSpec("TransactionController.parent", ParamType.BOOL, default=False), flag=True),
    ]))
