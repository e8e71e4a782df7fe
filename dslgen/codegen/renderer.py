"""
Renders call tree as Java source using jmeter-java-dsl

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
import logging

from dslgen import DslGenInternalException
from dslgen.codegen.calls import CallNode, Symbol

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

DSL_STATIC_IMPORT = "us.abstracta.jmeter.javadsl.JmeterDsl.*"
BASE_IMPORTS = ["java.io.IOException", "org.junit.jupiter.api.Test"]
# owners of static factory calls and constants, like Duration.ofSeconds or StandardCharsets.UTF_8
CALL_IMPORTS = {
    "Duration": "java.time.Duration",
    "Charset": "java.nio.charset.Charset",
}
SYMBOL_IMPORTS = {
    "TargetField": "us.abstracta.jmeter.javadsl.core.assertions.DslResponseAssertion.TargetField",
    "DslRegexExtractor": "us.abstracta.jmeter.javadsl.core.postprocessors.DslRegexExtractor",
    "DslScopedTestElement": "us.abstracta.jmeter.javadsl.core.testelements.DslScopedTestElement",
    "StandardCharsets": "java.nio.charset.StandardCharsets",
}

ESCAPES = {
    "\\": "\\\\",
    "\"": "\\\"",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def java_string(text):
    """
    Quoted Java string literal
    """
    chars = []
    for char in text:
        if char in ESCAPES:
            chars.append(ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7f:
            chars.append("\\u%04x" % ord(char))
        else:
            chars.append(char)
    return "\"%s\"" % "".join(chars)


def java_literal(value):
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if value < INT_MIN or value > INT_MAX:
            return "%sL" % value
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return java_string(value)
    raise DslGenInternalException("Can't render %r as Java literal" % (value,))


class JavaDslRenderer(object):
    """
    Produces JUnit 5 test class which builds and runs the plan

    :type settings: dict
    """

    def __init__(self, settings=None):
        self.log = logging.getLogger(self.__class__.__name__)
        settings = settings or {}
        self.class_name = settings.get("class-name", "PerformanceTest")
        self.method_name = settings.get("method-name", "test")
        self.indent = " " * int(settings.get("indent", 2))

    def render(self, tree):
        """
        :type tree: dslgen.codegen.calls.CallTree
        :rtype: str
        """
        roots = tree.roots()
        if len(roots) != 1:
            raise DslGenInternalException("Expected single root call, got %s" % len(roots))

        body_level = 2
        plan = self.render_call(roots[0], body_level)
        lines = ["import static %s;" % DSL_STATIC_IMPORT, ""]
        lines.extend("import %s;" % imp for imp in self.imports(tree))
        lines.extend([
            "",
            "public class %s {" % self.class_name,
            "",
            self._indent(1) + "@Test",
            self._indent(1) + "public void %s() throws IOException {" % self.method_name,
            self._indent(body_level) + plan + ".run();",
            self._indent(1) + "}",
            "",
            "}",
            "",
        ])
        self.log.debug("Rendered class %s", self.class_name)
        return "\n".join(lines)

    def imports(self, tree):
        """
        Sorted imports required by calls of the tree
        """
        imports = set(BASE_IMPORTS)
        for call in tree.walk():
            owner = call.function_name.rpartition(".")[0]
            if owner:
                if owner not in CALL_IMPORTS:
                    raise DslGenInternalException("No import known for %s" % call.function_name)
                imports.add(CALL_IMPORTS[owner])
            for arg in call.args:
                if isinstance(arg, Symbol):
                    owner = arg.name.split(".")[0]
                    if owner not in SYMBOL_IMPORTS:
                        raise DslGenInternalException("No import known for %s" % arg.name)
                    imports.add(SYMBOL_IMPORTS[owner])
        return sorted(imports)

    def render_call(self, call, level=0):
        """
        Single expression: function(args, nested...) followed by options and chained children

        :type call: CallNode
        :param level: indentation level of the line where expression starts
        :rtype: str
        """
        if call.is_noop:
            raise DslGenInternalException("No-op calls are not rendered")

        args = [self._render_arg(arg, level) for arg in call.args]
        nested = call.nested()
        if nested:
            items = [self.render_call(child, level + 1) for child in nested]
            head = ", ".join(args) + "," if args else ""
            text = "%s(%s\n%s\n%s)" % (call.function_name, head, self._lines(items, level + 1), self._indent(level))
        else:
            text = "%s(%s)" % (call.function_name, ", ".join(args))

        for option in call.options:
            text += "." + self.render_call(option, level)

        chained = call.chained()
        if chained:
            items = [self.render_call(child, level + 1) for child in chained]
            text += ".children(\n%s\n%s)" % (self._lines(items, level + 1), self._indent(level))
        return text

    def _render_arg(self, arg, level):
        if isinstance(arg, CallNode):
            return self.render_call(arg, level)
        if isinstance(arg, Symbol):
            return arg.name
        return java_literal(arg)

    def _lines(self, items, level):
        return ",\n".join(self._indent(level) + item for item in items)

    def _indent(self, level):
        return self.indent * level
