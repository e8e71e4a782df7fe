"""
HTTP samplers and HTTP related config elements

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
from dslgen.codegen.calls import CallNode
from dslgen.codegen.context import ScopeClass
from dslgen.codegen.params import ParamSpec, ParamType, Literal
from dslgen.codegen.registry import BuilderDescriptor, OptionSpec, named, prop_is, all_of, negate
from dslgen.model import TESTNAME, GUICLASS

HTTP_SAMPLER = "HTTPSamplerProxy"
HTTP_DEFAULTS = "ConfigTestElement"
HTTP_ARGUMENT = "HTTPArgument"
HEADER = "Header"
SAMPLER_NAME = "HTTP Request"

PROTOCOL = ParamSpec("HTTPSampler.protocol", default="http")
DOMAIN = ParamSpec("HTTPSampler.domain", default="")
PORT = ParamSpec("HTTPSampler.port", default="")
PATH = ParamSpec("HTTPSampler.path", default="")
URL_PARAMS = [PROTOCOL, DOMAIN, PORT, PATH]
RAW_BODY = ParamSpec("HTTPSampler.postBodyRaw", ParamType.BOOL, default=False)

DEFAULT_PORTS = {"http": "80", "https": "443"}


def has_entries(entry_type):
    return lambda node: any(child.element_type == entry_type for child in node.children)


SAMPLER_OPTIONS = [
    OptionSpec("method", ParamSpec("HTTPSampler.method", default="GET")),
    OptionSpec("encoding", ParamSpec("HTTPSampler.contentEncoding", ParamType.CHARSET)),
    # JMeter does not follow redirects unless told so
    OptionSpec("followRedirects", ParamSpec("HTTPSampler.follow_redirects", ParamType.BOOL, default=True),
               absent="false"),
]

DESCRIPTORS = [
    BuilderDescriptor(HTTP_SAMPLER, "httpSampler", [ParamSpec(TESTNAME, default=SAMPLER_NAME)] + URL_PARAMS,
                      options=SAMPLER_OPTIONS, consumes=[RAW_BODY.name], applies=named(SAMPLER_NAME),
                      scope=ScopeClass.SAMPLER),
    BuilderDescriptor(HTTP_SAMPLER, "httpSampler", URL_PARAMS, options=SAMPLER_OPTIONS, consumes=[RAW_BODY.name],
                      scope=ScopeClass.SAMPLER),
    BuilderDescriptor(HTTP_DEFAULTS, "httpDefaults", URL_PARAMS,
                      applies=all_of(prop_is(GUICLASS, "HttpDefaultsGui"), negate(has_entries(HTTP_ARGUMENT))),
                      options=[
                          OptionSpec("encoding", ParamSpec("HTTPSampler.contentEncoding", ParamType.CHARSET)),
                          OptionSpec("downloadEmbeddedResources",
                                     ParamSpec("HTTPSampler.image_parser", ParamType.BOOL, default=False), flag=True),
                      ]),
    BuilderDescriptor("HeaderManager", "httpHeaders"),
    BuilderDescriptor("CookieManager", "httpCookies"),
    BuilderDescriptor("CacheManager", "httpCache"),
]


def make_url(protocol, domain, port, path):
    """
    Assemble url the way JMeter does from sampler fields.
    Without domain the path is relative to http defaults.
    """
    if not domain:
        return path
    protocol = protocol or "http"
    if port and DEFAULT_PORTS.get(protocol.lower()) != port:
        domain += ":" + port
    if path and not path.startswith("/"):
        path = "/" + path
    return protocol + "://" + domain + path


class HttpSamplerBuilder(CallBuilder):
    """
    Url fields are joined into single argument,
    arguments become either raw body or request parameters
    """
    ELEMENT_TYPES = (HTTP_SAMPLER,)
    ENTRIES = (HTTP_ARGUMENT,)

    def build_args(self, node, descriptor, values, context):
        url_values = values[-len(URL_PARAMS):]
        url = make_url(*[value.value for value in url_values])
        self.log.debug("Got %s for url in %s", url, context.path)
        return values[:-len(URL_PARAMS)] + [Literal(url)]

    def build_options(self, node, descriptor, context):
        options = super(HttpSamplerBuilder, self).build_options(node, descriptor, context)
        arguments = self.entries(node, HTTP_ARGUMENT)
        if not arguments:
            return options

        if self.extract(node, RAW_BODY, context).value:
            body = "".join(self.extract_raw(arg, "Argument.value", context) for arg in arguments)
            options.append(CallNode("body", [body]))
        else:
            for arg in arguments:
                name = self.extract_raw(arg, "Argument.name", context)
                value = self.extract_raw(arg, "Argument.value", context)
                options.append(CallNode("param", [name, value]))
        return options


class HttpDefaultsBuilder(CallBuilder):
    """
    Url of defaults is an option, httpDefaults() takes no args.
    Default parameters have no DSL counterpart, such defaults are not applicable.
    """
    ELEMENT_TYPES = (HTTP_DEFAULTS,)
    ENTRIES = (HTTP_ARGUMENT,)

    def build_args(self, node, descriptor, values, context):
        return []

    def build_options(self, node, descriptor, context):
        url_values = [self.extract(node, param, context).value for param in URL_PARAMS]
        url = make_url(*url_values)
        options = [CallNode("url", [url])] if url else []
        return options + super(HttpDefaultsBuilder, self).build_options(node, descriptor, context)


class HeadersBuilder(CallBuilder):
    ELEMENT_TYPES = ("HeaderManager",)
    ENTRIES = (HEADER,)

    def build_options(self, node, descriptor, context):
        options = super(HeadersBuilder, self).build_options(node, descriptor, context)
        for header in self.entries(node, HEADER):
            name = self.extract_raw(header, "Header.name", context)
            value = self.extract_raw(header, "Header.value", context)
            options.append(CallNode("header", [name, value]))
        return options
