"""
Assertions

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
from dslgen import MalformedPropertyError
from dslgen.codegen.builders.base import ScopedCallBuilder, known_scope, SAMPLE_SCOPE, SCOPE_VARIABLE
from dslgen.codegen.calls import CallNode, Symbol
from dslgen.codegen.params import ParamSpec, ParamType
from dslgen.codegen.registry import BuilderDescriptor, OptionSpec, named, all_of, negate, prop_is
from dslgen.model import TESTNAME

RESPONSE_ASSERTION = "ResponseAssertion"
JSON_ASSERTION = "JSONPathAssertion"
JSON_PLUGIN_ASSERTION = "com.atlantbh.jmeter.plugins.jsonutils.jsonpathassert.JSONPathAssertion"
TEST_STRINGS = "Asserion.test_strings"  # sic, that's how JMeter names it

TEST_FIELD = ParamSpec("Assertion.test_field", default="Assertion.response_data")
TEST_TYPE = ParamSpec("Assertion.test_type", ParamType.INT, default=16)

FIELDS = {
    "Assertion.response_data": "RESPONSE_BODY",
    "Assertion.response_data_as_document": "RESPONSE_BODY_AS_DOCUMENT",
    "Assertion.response_code": "RESPONSE_CODE",
    "Assertion.response_message": "RESPONSE_MESSAGE",
    "Assertion.response_headers": "RESPONSE_HEADERS",
    "Assertion.request_headers": "REQUEST_HEADERS",
    "Assertion.sample_label": "REQUEST_URL",
    "Assertion.request_data": "REQUEST_BODY",
}

# Assertion.test_type bits
MATCH = 1
CONTAINS = 2
NOT = 4
EQUALS = 8
SUBSTRING = 16
OR = 32

CHECK_METHODS = (
    (CONTAINS, "containsRegexes"),
    (MATCH, "matchesRegexes"),
    (EQUALS, "equalsToStrings"),
    (SUBSTRING, "containsSubstrings"),
)

JSON_PATH = ParamSpec("JSON_PATH")
JSON_VALIDATION = ParamSpec("JSONVALIDATION", ParamType.BOOL, default=False)
JSON_REGEX = ParamSpec("ISREGEX", ParamType.BOOL, default=True)
JSON_EXPECTED = ParamSpec("EXPECTED_VALUE", default="")

IGNORE_STATUS = OptionSpec("ignoreStatus", ParamSpec("Assertion.assume_success", ParamType.BOOL, default=False),
                           flag=True)
RESPONSE_CONSUMED = [TEST_FIELD.name, TEST_TYPE.name, "Assertion.custom_message", SAMPLE_SCOPE, SCOPE_VARIABLE]

DESCRIPTORS = [
    BuilderDescriptor(RESPONSE_ASSERTION, "responseAssertion", [ParamSpec(TESTNAME, default="Response Assertion")],
                      applies=all_of(named("Response Assertion"), known_scope), consumes=RESPONSE_CONSUMED,
                      options=[IGNORE_STATUS]),
    BuilderDescriptor(RESPONSE_ASSERTION, "responseAssertion", applies=known_scope, consumes=RESPONSE_CONSUMED,
                      options=[IGNORE_STATUS]),
]

JSON_CONSUMED = [JSON_VALIDATION.name, JSON_REGEX.name, JSON_EXPECTED.name, "EXPECT_NULL", SAMPLE_SCOPE,
                 SCOPE_VARIABLE]
JSON_OPTIONS = [OptionSpec("not", ParamSpec("INVERT", ParamType.BOOL, default=False), flag=True)]
# DSL has no check for null value
EXPECTS_NULL = all_of(prop_is(JSON_VALIDATION.name, "true"), prop_is("EXPECT_NULL", "true"))
JSON_APPLIES = all_of(negate(EXPECTS_NULL), known_scope)

for _element_type in (JSON_ASSERTION, JSON_PLUGIN_ASSERTION):
    DESCRIPTORS += [
        BuilderDescriptor(_element_type, "jsonAssertion", [ParamSpec(TESTNAME, default="JSON Assertion"), JSON_PATH],
                          applies=all_of(named("JSON Assertion"), JSON_APPLIES), consumes=JSON_CONSUMED,
                          options=JSON_OPTIONS),
        BuilderDescriptor(_element_type, "jsonAssertion", [JSON_PATH], applies=JSON_APPLIES, consumes=JSON_CONSUMED,
                          options=JSON_OPTIONS),
    ]


class ResponseAssertionBuilder(ScopedCallBuilder):
    """
    Test type bitmask is split into check method, inversion and any-match switches,
    test strings go as check method arguments
    """
    ELEMENT_TYPES = (RESPONSE_ASSERTION,)
    ENTRIES = (TEST_STRINGS,)

    def build_options(self, node, descriptor, context):
        options = []

        field = self.extract(node, TEST_FIELD, context).value
        if field not in FIELDS:
            raise MalformedPropertyError(TEST_FIELD.name, field, TEST_FIELD.param_type, context.path,
                                         reason="unknown field to test")
        if FIELDS[field] != FIELDS[TEST_FIELD.default]:
            options.append(CallNode("fieldToTest", [Symbol("TargetField." + FIELDS[field])]))

        test_type = self.extract(node, TEST_TYPE, context).value
        strings = [self.extract_raw(entry, "value", context) for entry in self.entries(node, TEST_STRINGS)]
        if strings:
            method = self._check_method(test_type, context)
            options.append(CallNode(method, strings))

        if test_type & NOT:
            options.append(CallNode("invertCheck"))
        if test_type & OR:
            options.append(CallNode("anyMatch"))

        return options + super(ResponseAssertionBuilder, self).build_options(node, descriptor, context)

    def _check_method(self, test_type, context):
        for bit, method in CHECK_METHODS:
            if test_type & bit:
                return method
        raise MalformedPropertyError(TEST_TYPE.name, test_type, TEST_TYPE.param_type, context.path,
                                     reason="no check kind set")


class JsonAssertionBuilder(ScopedCallBuilder):
    """
    Expected value is checked only when validation switch is on, as a regex or as exact value
    """
    ELEMENT_TYPES = (JSON_ASSERTION, JSON_PLUGIN_ASSERTION)

    def build_options(self, node, descriptor, context):
        options = []
        if self.extract(node, JSON_VALIDATION, context).value:
            expected = self.extract(node, JSON_EXPECTED, context).value
            if self.extract(node, JSON_REGEX, context).value:
                options.append(CallNode("matches", [expected]))
            else:
                options.append(CallNode("equalsTo", [expected]))
        return options + super(JsonAssertionBuilder, self).build_options(node, descriptor, context)
