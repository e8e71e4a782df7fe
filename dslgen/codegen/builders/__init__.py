"""
Catalog of DSL builders: descriptors in registration order and builders table

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
from dslgen.codegen.builders import testplan, threadgroups, logic, http, samplers, timers, assertions, extractors
from dslgen.codegen.builders import configs
from dslgen.codegen.builders.assertions import ResponseAssertionBuilder, JsonAssertionBuilder
from dslgen.codegen.builders.base import CallBuilder
from dslgen.codegen.builders.configs import ResultCollectorBuilder
from dslgen.codegen.builders.extractors import TextExtractorBuilder, JsonExtractorBuilder
from dslgen.codegen.builders.http import HttpSamplerBuilder, HttpDefaultsBuilder, HeadersBuilder
from dslgen.codegen.builders.testplan import TestPlanBuilder, VariablesBuilder
from dslgen.codegen.builders.threadgroups import ThreadGroupBuilder
from dslgen.codegen.builders.timers import UniformRandomTimerBuilder
from dslgen.codegen.registry import BuilderRegistry

DESCRIPTORS = []
for _module in (testplan, threadgroups, logic, http, samplers, timers, assertions, extractors, configs):
    DESCRIPTORS.extend(_module.DESCRIPTORS)

BUILDER_CLASSES = (TestPlanBuilder, VariablesBuilder, ThreadGroupBuilder, HttpSamplerBuilder, HttpDefaultsBuilder,
                   HeadersBuilder, UniformRandomTimerBuilder, ResponseAssertionBuilder, JsonAssertionBuilder,
                   TextExtractorBuilder, JsonExtractorBuilder, ResultCollectorBuilder)

BUILDERS = {element_type: builder for builder in BUILDER_CLASSES for element_type in builder.ELEMENT_TYPES}


def default_registry():
    """
    :rtype: BuilderRegistry
    """
    return BuilderRegistry(DESCRIPTORS)


def builder_class(element_type):
    """
    Dedicated builder for element type, generic one when there is none
    """
    return BUILDERS.get(element_type, CallBuilder)
