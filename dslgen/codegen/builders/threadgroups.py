"""
Thread groups

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
from dslgen.codegen.params import ParamSpec, ParamType, as_argument
from dslgen.codegen.registry import BuilderDescriptor, OptionSpec, prop_is, named, negate, all_of
from dslgen.model import TESTNAME

THREAD_GROUP = "ThreadGroup"
TG_NAME = "Thread Group"

NAME = ParamSpec(TESTNAME, default=TG_NAME)
THREADS = ParamSpec("ThreadGroup.num_threads", ParamType.INT)
ITERATIONS = ParamSpec("LoopController.loops", ParamType.INT)
DURATION = ParamSpec("ThreadGroup.duration", ParamType.DURATION_SECONDS)
RAMP_UP = ParamSpec("ThreadGroup.ramp_time", ParamType.DURATION_SECONDS, default=0)

SCHEDULED = prop_is("ThreadGroup.scheduler", "true")


def no_ramp_up(node):
    raw = node.get(RAMP_UP.name)
    return raw is None or str(raw).strip() in ("", "0")


INFINITE = prop_is(ITERATIONS.name, "-1")


def single_limit(node):
    """
    Scheduled groups are supported only when iterations are not limited too
    """
    return not SCHEDULED(node) or INFINITE(node)


ITERATING = all_of(negate(SCHEDULED), no_ramp_up)
TIMED = all_of(SCHEDULED, INFINITE, no_ramp_up)
RAMPING = all_of(negate(no_ramp_up), single_limit)

CONSUMED = ("ThreadGroup.scheduler", "LoopController.continue_forever", THREADS.name, ITERATIONS.name,
            DURATION.name, RAMP_UP.name)


def _group(function_name, params, applies, **kwargs):
    return BuilderDescriptor(THREAD_GROUP, function_name, params, applies=applies, scope=ScopeClass.GROUP,
                             consumes=CONSUMED, **kwargs)


DESCRIPTORS = [
    _group("threadGroup", [NAME, THREADS, ITERATIONS], all_of(named(TG_NAME), ITERATING)),
    _group("threadGroup", [THREADS, ITERATIONS], ITERATING),
    _group("threadGroup", [NAME, THREADS, DURATION], all_of(named(TG_NAME), TIMED)),
    _group("threadGroup", [THREADS, DURATION], TIMED),
    # ramping groups are built with no args, load profile goes to options
    _group("threadGroup", [NAME], all_of(named(TG_NAME), RAMPING), min_args=1),
    _group("threadGroup", [], RAMPING),
]

for _type, _function, _default_name in (("SetupThreadGroup", "setupThreadGroup", "setUp Thread Group"),
                                        ("PostThreadGroup", "teardownThreadGroup", "tearDown Thread Group")):
    DESCRIPTORS.append(BuilderDescriptor(
        _type, _function, [ParamSpec(TESTNAME, default=_default_name)], scope=ScopeClass.GROUP,
        options=[OptionSpec("threadCount", ParamSpec(THREADS.name, ParamType.INT, default=1)),
                 OptionSpec("iterations", ParamSpec(ITERATIONS.name, ParamType.INT, default=1))]))


class ThreadGroupBuilder(CallBuilder):
    """
    Groups with ramp-up are expressed as load profile: rampTo(threads, rampUp) + hold stage.
    Such groups take no children as arguments, all of them go to .children() after the stages.
    """
    ELEMENT_TYPES = (THREAD_GROUP,)

    def build_options(self, node, descriptor, context):
        options = super(ThreadGroupBuilder, self).build_options(node, descriptor, context)
        if not RAMPING(node):
            return options

        threads = self.extract(node, THREADS, context).value
        ramp_up = self.extract(node, RAMP_UP, context).value
        options.append(CallNode("rampTo", [threads, as_argument(ramp_up)]))

        if SCHEDULED(node):
            duration = self.extract(node, DURATION, context).value
            hold = duration.amount - ramp_up.amount
            if hold < 0:
                msg = "%s: duration %s is shorter than ramp-up %s, holding for 0s"
                self.log.warning(msg, context.path, duration.amount, ramp_up.amount)
                hold = 0
            options.append(CallNode("holdFor", [as_argument(duration._replace(amount=hold))]))
        else:
            iterations = self.extract(node, ITERATIONS, context).value
            options.append(CallNode("holdIterating", [iterations]))

        return options

    def build_children(self, node, context):
        children = super(ThreadGroupBuilder, self).build_children(node, context)
        if not RAMPING(node):
            return children
        return [ChildCall(ChainDecision.CHAINED, child.call) for child in children]
