"""
Non-HTTP samplers and scripting elements

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
from dslgen.codegen.registry import BuilderDescriptor, OptionSpec, named
from dslgen.model import TESTNAME

DUMMY_SAMPLER = "kg.apc.jmeter.samplers.DummySampler"

# simulated timings are left out, DSL dummy sampler responds immediately by default
DUMMY_IGNORED = ["RESPONSE_TIME", "LATENCY", "CONNECT", "WAITING", "RESULT_CLASS"]

DUMMY_OPTIONS = [
    OptionSpec("responseCode", ParamSpec("RESPONSE_CODE", default="200")),
    OptionSpec("responseMessage", ParamSpec("RESPONSE_MESSAGE", default="OK")),
    OptionSpec("successful", ParamSpec("SUCCESFULL", ParamType.BOOL, default=True)),
    OptionSpec("requestBody", ParamSpec("REQUEST_DATA", default="")),
    OptionSpec("url", ParamSpec("URL", default="")),
]

SCRIPT_IGNORED = ["cacheKey", "filename", "parameters"]
SCRIPT_OPTIONS = [OptionSpec("language", ParamSpec("scriptLanguage", default="groovy"))]


def _named_pair(element_type, function_name, default_name, params, scope=ScopeClass.ELEMENT, **kwargs):
    name = ParamSpec(TESTNAME, default=default_name)
    return [
        BuilderDescriptor(element_type, function_name, [name] + params, applies=named(default_name), scope=scope,
                          **kwargs),
        BuilderDescriptor(element_type, function_name, params, scope=scope, **kwargs),
    ]


DESCRIPTORS = []
DESCRIPTORS += _named_pair(DUMMY_SAMPLER, "dummySampler", "jp@gc - Dummy Sampler", [ParamSpec("RESPONSE_DATA")],
                           scope=ScopeClass.SAMPLER, options=DUMMY_OPTIONS, consumes=DUMMY_IGNORED)
DESCRIPTORS += _named_pair("JSR223Sampler", "jsr223Sampler", "JSR223 Sampler", [ParamSpec("script")],
                           scope=ScopeClass.SAMPLER, options=SCRIPT_OPTIONS, consumes=SCRIPT_IGNORED)
DESCRIPTORS += _named_pair("JSR223PreProcessor", "jsr223PreProcessor", "JSR223 PreProcessor",
                           [ParamSpec("script")], options=SCRIPT_OPTIONS, consumes=SCRIPT_IGNORED)
DESCRIPTORS += _named_pair("JSR223PostProcessor", "jsr223PostProcessor", "JSR223 PostProcessor",
                           [ParamSpec("script")], options=SCRIPT_OPTIONS, consumes=SCRIPT_IGNORED)
