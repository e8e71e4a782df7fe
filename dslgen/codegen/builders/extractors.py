"""
Post processors extracting variables from responses

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
from dslgen.codegen.builders.base import ScopedCallBuilder, known_scope, SAMPLE_SCOPE, SCOPE_VARIABLE
from dslgen.codegen.calls import CallNode, Symbol
from dslgen.codegen.params import ParamSpec, ParamType
from dslgen.codegen.registry import BuilderDescriptor, OptionSpec, all_of, prop_is, negate
from dslgen.utils import is_blank

REGEX_EXTRACTOR = "RegexExtractor"
BOUNDARY_EXTRACTOR = "BoundaryExtractor"
JSON_EXTRACTOR = "JSONPostProcessor"

# values of useHeaders property, as JMeter GUI stores them
SUBJECTS = {
    "false": "RESPONSE_BODY",
    "unescaped": "RESPONSE_BODY_UNESCAPED",
    "as_document": "RESPONSE_BODY_AS_DOCUMENT",
    "true": "RESPONSE_HEADERS",
    "request_headers": "REQUEST_HEADERS",
    "url": "REQUEST_URL",
    "code": "RESPONSE_CODE",
    "message": "RESPONSE_MESSAGE",
}
DEFAULT_SUBJECT = "false"


def _subject(node, prefix):
    raw = node.get(prefix + ".useHeaders")
    if is_blank(raw):
        return DEFAULT_SUBJECT
    return str(raw).strip().lower()


def known_subject(prefix):
    return lambda node: _subject(node, prefix) in SUBJECTS


def _match_number(prop_name):
    # JMeter reads blank match number as 0, a random match
    return OptionSpec("matchNumber", ParamSpec(prop_name, ParamType.INT, default=1), absent="0")


def _default_value(prop_name):
    return OptionSpec("defaultValue", ParamSpec(prop_name, default=""))


class TextExtractorBuilder(ScopedCallBuilder):
    """
    Regular expression and boundary extractors, both look into the same parts of sample
    """
    ELEMENT_TYPES = (REGEX_EXTRACTOR, BOUNDARY_EXTRACTOR)

    def build_options(self, node, descriptor, context):
        prefix = node.element_type
        options = super(TextExtractorBuilder, self).build_options(node, descriptor, context)

        subject = _subject(node, prefix)
        if subject != DEFAULT_SUBJECT:
            field = Symbol("DslRegexExtractor.TargetField." + SUBJECTS[subject])
            options.insert(0, CallNode("fieldToCheck", [field]))

        empty_default = ParamSpec(prefix + ".default_empty_value", ParamType.BOOL, default=False)
        use_empty = self.extract(node, empty_default, context)
        if use_empty.value and is_blank(node.get(prefix + ".default")):
            options.append(CallNode("defaultValue", [""]))
        return options


class JsonExtractorBuilder(ScopedCallBuilder):
    ELEMENT_TYPES = (JSON_EXTRACTOR,)


DESCRIPTORS = [
    BuilderDescriptor(
        REGEX_EXTRACTOR, "regexExtractor",
        [ParamSpec("RegexExtractor.refname"), ParamSpec("RegexExtractor.regex")],
        options=[_match_number("RegexExtractor.match_number"),
                 OptionSpec("template", ParamSpec("RegexExtractor.template", default="$1$")),
                 _default_value("RegexExtractor.default")],
        consumes=["RegexExtractor.useHeaders", "RegexExtractor.default_empty_value", SAMPLE_SCOPE, SCOPE_VARIABLE],
        applies=all_of(known_subject(REGEX_EXTRACTOR), known_scope)),
    BuilderDescriptor(
        BOUNDARY_EXTRACTOR, "boundaryExtractor",
        [ParamSpec("BoundaryExtractor.refname"), ParamSpec("BoundaryExtractor.lboundary"),
         ParamSpec("BoundaryExtractor.rboundary")],
        options=[_match_number("BoundaryExtractor.match_number"), _default_value("BoundaryExtractor.default")],
        consumes=["BoundaryExtractor.useHeaders", "BoundaryExtractor.default_empty_value", SAMPLE_SCOPE,
                  SCOPE_VARIABLE],
        applies=all_of(known_subject(BOUNDARY_EXTRACTOR), known_scope)),
    BuilderDescriptor(
        JSON_EXTRACTOR, "jsonExtractor",
        [ParamSpec("JSONPostProcessor.referenceNames"), ParamSpec("JSONPostProcessor.jsonPathExprs")],
        options=[_match_number("JSONPostProcessor.match_numbers"),
                 _default_value("JSONPostProcessor.defaultValues")],
        consumes=["JSONPostProcessor.compute_concat", SAMPLE_SCOPE, SCOPE_VARIABLE],
        applies=all_of(negate(prop_is("JSONPostProcessor.compute_concat", "true")), known_scope)),
]
