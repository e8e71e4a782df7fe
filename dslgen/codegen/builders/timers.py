"""
Timers and pauses

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
from dslgen.codegen.context import ScopeClass
from dslgen.codegen.params import ParamSpec, ParamType, Literal
from dslgen.codegen.registry import BuilderDescriptor, prop_is

DELAY = ParamSpec("ConstantTimer.delay", ParamType.LONG, noop=0)
RANGE = ParamSpec("RandomTimer.range", ParamType.FLOAT, noop=0.0)

PAUSE_ACTION = "1"
PAUSE = ParamSpec("ActionProcessor.duration", ParamType.DURATION_MILLIS, noop=0)

DESCRIPTORS = [
    BuilderDescriptor("ConstantTimer", "constantTimer", [DELAY]),
    BuilderDescriptor("UniformRandomTimer", "uniformRandomTimer", [DELAY, RANGE]),
    # pause is the only TestAction which has a DSL counterpart, stop/restart actions have none
    BuilderDescriptor("TestAction", "threadPause", [PAUSE],
                      consumes=["ActionProcessor.action", "ActionProcessor.target"],
                      applies=prop_is("ActionProcessor.action", PAUSE_ACTION), scope=ScopeClass.SAMPLER),
]


class UniformRandomTimerBuilder(CallBuilder):
    """
    JMeter keeps delay and range, DSL takes [min, max] interval
    """
    ELEMENT_TYPES = ("UniformRandomTimer",)

    def build_args(self, node, descriptor, values, context):
        delay, delay_range = [value.value for value in values]
        maximum = delay + int(round(delay_range))
        self.log.debug("Random delay in %s is [%s, %s]", context.path, delay, maximum)
        return [Literal(delay), Literal(maximum)]
