from dslgen import NoBuilderFoundError, UnsupportedExpressionError, MalformedPropertyError
from dslgen.codegen.builders.configs import split_path
from dslgen.codegen.builders.http import make_url
from dslgen.codegen.calls import CallNode, Symbol
from dslgen.codegen.generator import CodeGenerator
from tests import DslGenTestCase, node, plan, thread_group, http_sampler, root_context


def seconds(amount):
    return CallNode("Duration.ofSeconds", [amount])


class BuilderTestCase(DslGenTestCase):
    def setUp(self):
        super(BuilderTestCase, self).setUp()
        self.generator = CodeGenerator()

    def build(self, element, *parents):
        """
        Build element placed under given parents, outermost first
        """
        context = root_context(parents[0]) if parents else root_context(element)
        for parent in parents[1:]:
            context = context.descend(parent)
        if parents:
            context = context.descend(element)
        return self.generator.build(element, context)

    def build_in_group(self, element):
        group = thread_group(element)
        return self.build(element, plan(group), group)


class TestTestPlan(BuilderTestCase):
    def test_plain(self):
        self.assertEqual(CallNode("testPlan"), self.build(plan()))

    def test_sequential_and_variables(self):
        argument = node("Argument", **{"Argument.name": "host", "Argument.value": "example.com"})
        call = self.build(plan(argument, **{"TestPlan.serialize_threadgroups": True}))
        self.assertEqual((CallNode("sequentialThreadGroups"),), call.options)
        self.assertEqual([CallNode("vars", options=[CallNode("set", ["host", "example.com"])])], call.chained())

    def test_not_sequential(self):
        call = self.build(plan(**{"TestPlan.serialize_threadgroups": "false"}))
        self.assertEqual((), call.options)

    def test_variables_element(self):
        variables = node("Arguments", [node("Argument", **{"Argument.name": "a", "Argument.value": "1"}),
                                       node("Argument", **{"Argument.name": "b", "Argument.value": "2"})])
        call = self.build_in_group(variables)
        self.assertEqual(CallNode("vars", options=[CallNode("set", ["a", "1"]), CallNode("set", ["b", "2"])]), call)


class TestThreadGroups(BuilderTestCase):
    def test_iterations(self):
        call = self.build(thread_group(**{"ThreadGroup.num_threads": "10", "LoopController.loops": "5"}))
        self.assertEqual(CallNode("threadGroup", [10, 5]), call)

    def test_named(self):
        call = self.build(thread_group(testname="Users"))
        self.assertEqual(CallNode("threadGroup", ["Users", 1, 1]), call)

    def test_duration(self):
        group = thread_group(**{"ThreadGroup.scheduler": "true", "LoopController.loops": "-1",
                                "ThreadGroup.duration": "60"})
        self.assertEqual(CallNode("threadGroup", [1, seconds(60)]), self.build(group))

    def test_ramp_up_with_duration(self):
        group = thread_group(**{"ThreadGroup.num_threads": "10", "ThreadGroup.ramp_time": "5",
                                "ThreadGroup.scheduler": "true", "LoopController.loops": "-1",
                                "ThreadGroup.duration": "60"})
        call = self.build(group)
        self.assertEqual("threadGroup", call.function_name)
        self.assertEqual((), call.args)
        self.assertEqual((CallNode("rampTo", [10, seconds(5)]), CallNode("holdFor", [seconds(55)])), call.options)

    def test_ramp_up_with_iterations(self):
        group = thread_group(testname="Users", **{"ThreadGroup.num_threads": "10", "ThreadGroup.ramp_time": "5",
                                                  "LoopController.loops": "20"})
        call = self.build(group)
        self.assertEqual(("Users",), call.args)
        self.assertEqual((CallNode("rampTo", [10, seconds(5)]), CallNode("holdIterating", [20])), call.options)

    def test_ramping_group_chains_all_children(self):
        timer = node("ConstantTimer", **{"ConstantTimer.delay": "100"})
        group = thread_group(timer, http_sampler(), **{"ThreadGroup.num_threads": "10", "ThreadGroup.ramp_time": "5",
                                                       "LoopController.loops": "20"})
        call = self.build(group)
        self.assertEqual(["constantTimer", "httpSampler"], [child.function_name for child in call.chained()])
        self.assertEqual([], call.nested())

    def test_plain_group_nests_samplers(self):
        call = self.build(thread_group(http_sampler()))
        self.assertEqual(["httpSampler"], [child.function_name for child in call.nested()])

    def test_ramp_longer_than_duration(self):
        self.sniff_log()
        group = thread_group(**{"ThreadGroup.ramp_time": "10", "ThreadGroup.scheduler": "true",
                                "LoopController.loops": "-1", "ThreadGroup.duration": "5"})
        call = self.build(group)
        self.assertEqual(CallNode("holdFor", [seconds(0)]), call.options[-1])
        self.assertIn("shorter than ramp-up", self.log_recorder.warn_buff.getvalue())

    def test_expression_in_threads(self):
        group = thread_group(**{"ThreadGroup.num_threads": "${__P(threads,1)}"})
        with self.assertRaises(UnsupportedExpressionError) as ctx:
            self.build(group)
        self.assertEqual("ThreadGroup.num_threads", ctx.exception.property_name)

    def test_setup_group(self):
        group = node("SetupThreadGroup", testname="setUp Thread Group",
                     **{"ThreadGroup.num_threads": "2", "LoopController.loops": "1"})
        self.assertEqual(CallNode("setupThreadGroup", options=[CallNode("threadCount", [2])]), self.build(group))

    def test_teardown_group(self):
        group = node("PostThreadGroup", testname="cleanup")
        self.assertEqual(CallNode("teardownThreadGroup", ["cleanup"]), self.build(group))


class TestControllers(BuilderTestCase):
    def test_loop(self):
        loop = node("LoopController", testname="Loop Controller", **{"LoopController.loops": "3"})
        self.assertEqual(CallNode("forLoopController", [3]), self.build_in_group(loop))

    def test_named_loop(self):
        loop = node("LoopController", testname="Repeat", **{"LoopController.loops": "3"})
        self.assertEqual(CallNode("forLoopController", ["Repeat", 3]), self.build_in_group(loop))

    def test_while_expression(self):
        controller = node("WhileController", **{"WhileController.condition": "${__jexl3(${n} < 10)}"})
        self.assertRaises(UnsupportedExpressionError, self.build_in_group, controller)

    def test_if(self):
        controller = node("IfController", testname="If Controller",
                          **{"IfController.condition": "true", "IfController.useExpression": "true"})
        self.assertEqual(CallNode("ifController", ["true"]), self.build_in_group(controller))

    def test_if_javascript_condition(self):
        controller = node("IfController", **{"IfController.condition": "true", "IfController.useExpression": "false"})
        self.assertRaises(NoBuilderFoundError, self.build_in_group, controller)
        legacy = node("IfController", **{"IfController.condition": "true"})
        self.assertRaises(NoBuilderFoundError, self.build_in_group, legacy)

    def test_if_evaluated_for_all_children(self):
        controller = node("IfController", **{"IfController.condition": "true", "IfController.useExpression": "true",
                                             "IfController.evaluateAll": "true"})
        self.assertRaises(NoBuilderFoundError, self.build_in_group, controller)

    def test_foreach(self):
        controller = node("ForeachController", testname="ForEach Controller",
                          **{"ForeachController.inputVal": "ids", "ForeachController.returnVal": "id"})
        self.assertEqual(CallNode("forEachController", ["ids", "id"]), self.build_in_group(controller))

    def test_foreach_without_separator(self):
        props = {"ForeachController.inputVal": "ids", "ForeachController.returnVal": "id",
                 "ForeachController.useSeparator": "false"}
        self.assertRaises(NoBuilderFoundError, self.build_in_group, node("ForeachController", **props))

    def test_foreach_index_range(self):
        props = {"ForeachController.inputVal": "ids", "ForeachController.returnVal": "id",
                 "ForeachController.useSeparator": "true", "ForeachController.startIndex": "2"}
        self.assertRaises(NoBuilderFoundError, self.build_in_group, node("ForeachController", **props))

    def test_transaction(self):
        controller = node("TransactionController", testname="Login",
                          **{"TransactionController.includeTimers": "true", "TransactionController.parent": "false"})
        call = self.build_in_group(controller)
        self.assertEqual(CallNode("transaction", ["Login"], [CallNode("includeTimersAndProcessorsTime")]), call)

    def test_transaction_keeps_default_name(self):
        controller = node("TransactionController", testname="Transaction Controller")
        call = self.build_in_group(controller)
        self.assertEqual(("Transaction Controller",), call.args)

    def test_simple(self):
        self.assertEqual(CallNode("simpleController"), self.build_in_group(node("GenericController")))
        named = node("GenericController", testname="Flow")
        self.assertEqual(CallNode("simpleController", ["Flow"]), self.build_in_group(named))

    def test_children_nested(self):
        controller = node("GenericController", [http_sampler()])
        call = self.build_in_group(controller)
        self.assertEqual(["httpSampler"], [child.function_name for child in call.nested()])


class TestHttp(BuilderTestCase):
    def test_make_url(self):
        self.assertEqual("http://localhost/", make_url("http", "localhost", "", "/"))
        self.assertEqual("http://localhost/", make_url("http", "localhost", "80", "/"))
        self.assertEqual("https://localhost:8443/api", make_url("https", "localhost", "8443", "api"))
        self.assertEqual("/relative", make_url("http", "", "", "/relative"))
        self.assertEqual("http://localhost", make_url("", "localhost", "", ""))

    def test_post_with_params(self):
        argument = node("HTTPArgument", **{"Argument.name": "q", "Argument.value": "dsl"})
        sampler = http_sampler(argument, testname="search", **{"HTTPSampler.method": "POST",
                                                              "HTTPSampler.port": "8080"})
        call = self.build_in_group(sampler)
        self.assertEqual(("search", "http://localhost:8080/"), call.args)
        self.assertEqual((CallNode("method", ["POST"]), CallNode("param", ["q", "dsl"])), call.options)

    def test_raw_body(self):
        argument = node("HTTPArgument", **{"Argument.value": '{"name": "dsl"}'})
        sampler = http_sampler(argument, **{"HTTPSampler.method": "POST", "HTTPSampler.postBodyRaw": True})
        call = self.build_in_group(sampler)
        self.assertEqual(CallNode("body", ['{"name": "dsl"}']), call.options[-1])

    def test_follow_redirects(self):
        sampler = http_sampler(**{"HTTPSampler.follow_redirects": "false", "HTTPSampler.contentEncoding": "UTF-8"})
        call = self.build_in_group(sampler)
        self.assertEqual((CallNode("encoding", [Symbol("StandardCharsets.UTF_8")]),
                          CallNode("followRedirects", [False])), call.options)

    def test_follow_redirects_absent(self):
        self.sniff_log()
        sampler = http_sampler()
        sampler = node("HTTPSamplerProxy", **{key: value for key, value in sampler.properties.items()
                                              if key != "HTTPSampler.follow_redirects"})
        call = self.build_in_group(sampler)
        self.assertEqual((CallNode("followRedirects", [False]),), call.options)
        self.assertIn("No HTTPSampler.follow_redirects found in", self.log_recorder.warn_buff.getvalue())

    def test_custom_encoding(self):
        call = self.build_in_group(http_sampler(**{"HTTPSampler.contentEncoding": "windows-1252"}))
        self.assertEqual((CallNode("encoding", [CallNode("Charset.forName", ["windows-1252"])]),), call.options)

    def test_blank_encoding(self):
        call = self.build_in_group(http_sampler(**{"HTTPSampler.contentEncoding": " "}))
        self.assertEqual((), call.options)

    def test_headers(self):
        header = node("Header", **{"Header.name": "Accept", "Header.value": "application/json"})
        call = self.build_in_group(node("HeaderManager", [header], testname="HTTP Header Manager"))
        self.assertEqual(CallNode("httpHeaders", options=[CallNode("header", ["Accept", "application/json"])]), call)

    def test_cookies_and_cache(self):
        self.assertEqual(CallNode("httpCookies"), self.build_in_group(node("CookieManager")))
        self.assertEqual(CallNode("httpCache"), self.build_in_group(node("CacheManager")))

    def test_defaults(self):
        defaults = node("ConfigTestElement", guiclass="HttpDefaultsGui",
                        **{"HTTPSampler.domain": "example.com", "HTTPSampler.protocol": "https",
                           "HTTPSampler.image_parser": "true"})
        call = self.build_in_group(defaults)
        self.assertEqual(CallNode("httpDefaults", options=[CallNode("url", ["https://example.com"]),
                                                          CallNode("downloadEmbeddedResources")]), call)

    def test_defaults_with_params(self):
        argument = node("HTTPArgument", **{"Argument.name": "lang", "Argument.value": "en"})
        defaults = node("ConfigTestElement", [argument], guiclass="HttpDefaultsGui", testname="HTTP Request Defaults",
                        **{"HTTPSampler.domain": "example.com"})
        with self.assertRaises(NoBuilderFoundError) as ctx:
            self.build_in_group(defaults)
        self.assertEqual("ConfigTestElement", ctx.exception.element_type)
        self.assertTrue(ctx.exception.path.endswith("/ConfigTestElement[HTTP Request Defaults]"))

    def test_defaults_encoding(self):
        defaults = node("ConfigTestElement", guiclass="HttpDefaultsGui", **{"HTTPSampler.contentEncoding": "utf-8"})
        call = self.build_in_group(defaults)
        self.assertEqual(CallNode("httpDefaults", options=[CallNode("encoding", [Symbol("StandardCharsets.UTF_8")])]),
                         call)

    def test_other_config_element(self):
        self.assertRaises(NoBuilderFoundError, self.build_in_group, node("ConfigTestElement", guiclass="Other"))


class TestTimers(BuilderTestCase):
    def test_constant(self):
        call = self.build_in_group(node("ConstantTimer", **{"ConstantTimer.delay": "300"}))
        self.assertEqual(CallNode("constantTimer", [300]), call)

    def test_constant_noop(self):
        self.assertTrue(self.build_in_group(node("ConstantTimer", **{"ConstantTimer.delay": "0"})).is_noop)

    def test_large_delay(self):
        call = self.build_in_group(node("ConstantTimer", **{"ConstantTimer.delay": "3000000000"}))
        self.assertEqual((3000000000,), call.args)

    def test_uniform(self):
        timer = node("UniformRandomTimer", **{"ConstantTimer.delay": "100", "RandomTimer.range": "50.0"})
        self.assertEqual(CallNode("uniformRandomTimer", [100, 150]), self.build_in_group(timer))

    def test_uniform_noop(self):
        timer = node("UniformRandomTimer", **{"ConstantTimer.delay": "0", "RandomTimer.range": "0"})
        self.assertTrue(self.build_in_group(timer).is_noop)

    def test_pause(self):
        pause = node("TestAction", **{"ActionProcessor.action": 1, "ActionProcessor.target": 0,
                                      "ActionProcessor.duration": "500"})
        self.assertEqual(CallNode("threadPause", [CallNode("Duration.ofMillis", [500])]), self.build_in_group(pause))

    def test_stop_action(self):
        stop = node("TestAction", **{"ActionProcessor.action": 0, "ActionProcessor.duration": "0"})
        self.assertRaises(NoBuilderFoundError, self.build_in_group, stop)

    def test_malformed_delay(self):
        timer = node("ConstantTimer", **{"ConstantTimer.delay": "soon"})
        self.assertRaises(MalformedPropertyError, self.build_in_group, timer)


class TestAssertions(BuilderTestCase):
    def test_response_code(self):
        assertion = node("ResponseAssertion", [node("Asserion.test_strings", value="200")],
                         testname="Response Assertion",
                         **{"Assertion.test_field": "Assertion.response_code", "Assertion.test_type": 8,
                            "Assertion.assume_success": "false"})
        call = self.build_in_group(assertion)
        self.assertEqual(CallNode("responseAssertion", options=[
            CallNode("fieldToTest", [Symbol("TargetField.RESPONSE_CODE")]),
            CallNode("equalsToStrings", ["200"]),
        ]), call)

    def test_inverted_any(self):
        strings = [node("Asserion.test_strings", value="error"), node("Asserion.test_strings", value="fail")]
        assertion = node("ResponseAssertion", strings, testname="No errors",
                         **{"Assertion.test_field": "Assertion.response_data", "Assertion.test_type": "38",
                            "Assertion.assume_success": "true"})
        call = self.build_in_group(assertion)
        self.assertEqual(("No errors",), call.args)
        self.assertEqual([CallNode("containsRegexes", ["error", "fail"]), CallNode("invertCheck"),
                          CallNode("anyMatch"), CallNode("ignoreStatus")], list(call.options))

    def test_unknown_field(self):
        assertion = node("ResponseAssertion", **{"Assertion.test_field": "Assertion.something"})
        self.assertRaises(MalformedPropertyError, self.build_in_group, assertion)

    def test_json_equals(self):
        assertion = node("com.atlantbh.jmeter.plugins.jsonutils.jsonpathassert.JSONPathAssertion",
                         testname="JSON Assertion",
                         **{"JSON_PATH": "$.id", "EXPECTED_VALUE": "1", "JSONVALIDATION": "true",
                            "ISREGEX": "false", "INVERT": "true"})
        call = self.build_in_group(assertion)
        self.assertEqual(CallNode("jsonAssertion", ["$.id"], [CallNode("equalsTo", ["1"]), CallNode("not")]), call)

    def test_json_exists(self):
        assertion = node("com.atlantbh.jmeter.plugins.jsonutils.jsonpathassert.JSONPathAssertion",
                         testname="has id", **{"JSON_PATH": "$.id", "JSONVALIDATION": "false"})
        self.assertEqual(CallNode("jsonAssertion", ["has id", "$.id"]), self.build_in_group(assertion))

    def test_core_json_assertion(self):
        assertion = node("JSONPathAssertion", testname="JSON Assertion",
                         **{"JSON_PATH": "$.status", "EXPECTED_VALUE": "ok", "JSONVALIDATION": "true",
                            "ISREGEX": "false", "EXPECT_NULL": "false", "INVERT": "false"})
        call = self.build_in_group(assertion)
        self.assertEqual(CallNode("jsonAssertion", ["$.status"], [CallNode("equalsTo", ["ok"])]), call)

    def test_json_expect_null(self):
        assertion = node("JSONPathAssertion", **{"JSON_PATH": "$.error", "JSONVALIDATION": "true",
                                                 "EXPECT_NULL": "true"})
        self.assertRaises(NoBuilderFoundError, self.build_in_group, assertion)

    def test_json_null_ignored_without_validation(self):
        assertion = node("JSONPathAssertion", **{"JSON_PATH": "$.error", "JSONVALIDATION": "false",
                                                 "EXPECT_NULL": "true"})
        self.assertEqual(CallNode("jsonAssertion", ["$.error"]), self.build_in_group(assertion))

    def test_json_scope(self):
        assertion = node("JSONPathAssertion", **{"JSON_PATH": "$.id", "Sample.scope": "all"})
        call = self.build_in_group(assertion)
        self.assertEqual((CallNode("scope", [Symbol("DslScopedTestElement.Scope.ALL_SAMPLES")]),), call.options)

    def test_response_scope_variable(self):
        assertion = node("ResponseAssertion", [node("Asserion.test_strings", value="ok")],
                         **{"Assertion.test_type": "16", "Sample.scope": "variable", "Scope.variable": "status"})
        call = self.build_in_group(assertion)
        self.assertEqual([CallNode("containsSubstrings", ["ok"]), CallNode("scopeVariable", ["status"])],
                         list(call.options))

    def test_response_parent_scope(self):
        assertion = node("ResponseAssertion", [node("Asserion.test_strings", value="ok")],
                         **{"Assertion.test_type": "16", "Sample.scope": "parent"})
        self.assertEqual([CallNode("containsSubstrings", ["ok"])], list(self.build_in_group(assertion).options))

    def test_unknown_scope(self):
        assertion = node("ResponseAssertion", **{"Sample.scope": "variable"})
        self.assertRaises(NoBuilderFoundError, self.build_in_group, assertion)


class TestExtractors(BuilderTestCase):
    def test_regex(self):
        extractor = node("RegexExtractor", **{"RegexExtractor.refname": "id", "RegexExtractor.regex": "id=(\\d+)",
                                              "RegexExtractor.template": "$1$", "RegexExtractor.default": "",
                                              "RegexExtractor.match_number": "1"})
        self.assertEqual(CallNode("regexExtractor", ["id", "id=(\\d+)"]), self.build_in_group(extractor))

    def test_regex_options(self):
        extractor = node("RegexExtractor", **{"RegexExtractor.refname": "id", "RegexExtractor.regex": "id=(\\d+)",
                                              "RegexExtractor.match_number": "2", "RegexExtractor.default": "none"})
        call = self.build_in_group(extractor)
        self.assertEqual((CallNode("matchNumber", [2]), CallNode("defaultValue", ["none"])), call.options)

    def test_boundary(self):
        extractor = node("BoundaryExtractor", **{"BoundaryExtractor.refname": "token",
                                                 "BoundaryExtractor.lboundary": "token=\"",
                                                 "BoundaryExtractor.rboundary": "\"",
                                                 "BoundaryExtractor.match_number": "1"})
        call = self.build_in_group(extractor)
        self.assertEqual(CallNode("boundaryExtractor", ["token", "token=\"", "\""]), call)

    def test_blank_match_number(self):
        self.sniff_log()
        extractor = node("BoundaryExtractor", **{"BoundaryExtractor.refname": "token",
                                                 "BoundaryExtractor.lboundary": "<", "BoundaryExtractor.rboundary": ">",
                                                 "BoundaryExtractor.match_number": ""})
        call = self.build_in_group(extractor)
        self.assertEqual((CallNode("matchNumber", [0]),), call.options)
        self.assertIn("No BoundaryExtractor.match_number found in", self.log_recorder.warn_buff.getvalue())
        self.assertIn("using default: 0", self.log_recorder.warn_buff.getvalue())

    def test_regex_headers(self):
        extractor = node("RegexExtractor", **{"RegexExtractor.refname": "session", "RegexExtractor.regex": "sid=(\\w+)",
                                              "RegexExtractor.match_number": "1", "RegexExtractor.useHeaders": "true",
                                              "Sample.scope": "children"})
        call = self.build_in_group(extractor)
        self.assertEqual((CallNode("fieldToCheck", [Symbol("DslRegexExtractor.TargetField.RESPONSE_HEADERS")]),
                          CallNode("scope", [Symbol("DslScopedTestElement.Scope.SUB_SAMPLES")])), call.options)

    def test_regex_subjects(self):
        for subject, field in (("false", None), ("unescaped", "RESPONSE_BODY_UNESCAPED"), ("URL", "REQUEST_URL"),
                               ("code", "RESPONSE_CODE"), ("request_headers", "REQUEST_HEADERS")):
            extractor = node("RegexExtractor", **{"RegexExtractor.refname": "v", "RegexExtractor.regex": "(.+)",
                                                  "RegexExtractor.match_number": "1",
                                                  "RegexExtractor.useHeaders": subject})
            expected = (CallNode("fieldToCheck", [Symbol("DslRegexExtractor.TargetField." + field)]),) if field else ()
            self.assertEqual(expected, self.build_in_group(extractor).options)

    def test_unknown_subject(self):
        extractor = node("RegexExtractor", **{"RegexExtractor.refname": "v", "RegexExtractor.regex": "(.+)",
                                              "RegexExtractor.useHeaders": "cookies"})
        self.assertRaises(NoBuilderFoundError, self.build_in_group, extractor)

    def test_boundary_variable_with_empty_default(self):
        extractor = node("BoundaryExtractor", **{"BoundaryExtractor.refname": "token",
                                                 "BoundaryExtractor.lboundary": "<", "BoundaryExtractor.rboundary": ">",
                                                 "BoundaryExtractor.match_number": "1",
                                                 "BoundaryExtractor.default_empty_value": "true",
                                                 "Sample.scope": "variable", "Scope.variable": "page"})
        call = self.build_in_group(extractor)
        self.assertEqual((CallNode("scopeVariable", ["page"]), CallNode("defaultValue", [""])), call.options)

    def test_json(self):
        extractor = node("JSONPostProcessor", **{"JSONPostProcessor.referenceNames": "id",
                                                 "JSONPostProcessor.jsonPathExprs": "$.id"})
        call = self.build_in_group(extractor)
        self.assertEqual(CallNode("jsonExtractor", ["id", "$.id"], [CallNode("matchNumber", [0])]), call)

    def test_json_options(self):
        extractor = node("JSONPostProcessor", **{"JSONPostProcessor.referenceNames": "id",
                                                 "JSONPostProcessor.jsonPathExprs": "$.id",
                                                 "JSONPostProcessor.match_numbers": "1",
                                                 "JSONPostProcessor.defaultValues": "NOT_FOUND",
                                                 "Sample.scope": "all"})
        call = self.build_in_group(extractor)
        self.assertEqual((CallNode("defaultValue", ["NOT_FOUND"]),
                          CallNode("scope", [Symbol("DslScopedTestElement.Scope.ALL_SAMPLES")])), call.options)

    def test_json_concatenation(self):
        extractor = node("JSONPostProcessor", **{"JSONPostProcessor.referenceNames": "ids",
                                                 "JSONPostProcessor.jsonPathExprs": "$..id",
                                                 "JSONPostProcessor.match_numbers": "-1",
                                                 "JSONPostProcessor.compute_concat": "true"})
        self.assertRaises(NoBuilderFoundError, self.build_in_group, extractor)


class TestOutsideGroups(BuilderTestCase):
    def test_sampler_under_plan_skipped(self):
        self.sniff_log()
        sampler = http_sampler(node("ConstantTimer", **{"ConstantTimer.delay": "100"}))
        call = self.build(sampler, plan(sampler))
        self.assertTrue(call.is_noop)
        self.assertEqual((), call.children)
        self.assertIn("Test Plan]/HTTPSamplerProxy[HTTP Request] is outside of thread groups",
                      self.log_recorder.warn_buff.getvalue())

    def test_controller_under_plan_skipped(self):
        controller = node("GenericController", [http_sampler()])
        self.assertTrue(self.build(controller, plan(controller)).is_noop)

    def test_timer_under_plan_kept(self):
        timer = node("ConstantTimer", **{"ConstantTimer.delay": "100"})
        self.assertEqual(CallNode("constantTimer", [100]), self.build(timer, plan(timer)))


class TestOtherElements(BuilderTestCase):
    def test_dummy_sampler(self):
        sampler = node("kg.apc.jmeter.samplers.DummySampler", testname="jp@gc - Dummy Sampler",
                       **{"RESPONSE_DATA": "ok", "RESPONSE_CODE": "404", "SUCCESFULL": "true",
                          "RESPONSE_TIME": "${__Random(50,500)}"})
        call = self.build_in_group(sampler)
        self.assertEqual(CallNode("dummySampler", ["ok"], [CallNode("responseCode", ["404"])]), call)

    def test_jsr223(self):
        sampler = node("JSR223Sampler", testname="JSR223 Sampler",
                       **{"script": "log.info('hi')", "scriptLanguage": "groovy", "cacheKey": "true"})
        self.assertEqual(CallNode("jsr223Sampler", ["log.info('hi')"]), self.build_in_group(sampler))

    def test_jsr223_processor_language(self):
        processor = node("JSR223PreProcessor", testname="prepare",
                         **{"script": "vars.put('a', '1')", "scriptLanguage": "javascript"})
        call = self.build_in_group(processor)
        self.assertEqual(CallNode("jsr223PreProcessor", ["prepare", "vars.put('a', '1')"],
                                  [CallNode("language", ["javascript"])]), call)

    def test_csv(self):
        csv = node("CSVDataSet", **{"filename": "users.csv", "delimiter": ",", "variableNames": "user,pass",
                                    "ignoreFirstLine": False, "stopThread": "true", "recycle": "true"})
        call = self.build_in_group(csv)
        self.assertEqual(CallNode("csvDataSet", ["users.csv"], [CallNode("variableNames", ["user,pass"]),
                                                                CallNode("stopThreadOnEOF")]), call)

    def test_jtl_writer(self):
        collector = node("ResultCollector", guiclass="SimpleDataWriter", filename="results/out.jtl")
        self.assertEqual(CallNode("jtlWriter", ["results", "out.jtl"]), self.build_in_group(collector))

    def test_results_tree(self):
        collector = node("ResultCollector", guiclass="ViewResultsFullVisualizer", filename="")
        self.assertEqual(CallNode("resultsTreeVisualizer"), self.build_in_group(collector))

    def test_other_listener(self):
        collector = node("ResultCollector", guiclass="SummaryReport", filename="")
        self.assertRaises(NoBuilderFoundError, self.build_in_group, collector)

    def test_split_path(self):
        self.assertEqual((".", "out.jtl"), split_path("out.jtl"))
        self.assertEqual(("/tmp/results", "out.jtl"), split_path("/tmp/results/out.jtl"))
        self.assertEqual(("C:\\results", "out.jtl"), split_path("C:\\results\\out.jtl"))
