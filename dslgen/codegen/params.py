"""
Classification of raw element properties into builder parameters

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
import math
import re
from collections import namedtuple

from dslgen import MalformedPropertyError
from dslgen.codegen.calls import CallNode, Symbol
from dslgen.utils import is_blank

EXPRESSION_PATTERN = re.compile(r"\$\{.+?\}", re.DOTALL)

FLOAT_TOLERANCE = 1e-6


def has_expression(val):
    """
    JMeter variable or function reference like ${var} or ${__P(name,1)}
    """
    if isinstance(val, str):
        return bool(EXPRESSION_PATTERN.search(val))
    else:
        return False


class Duration(namedtuple("Duration", ["amount", "unit"])):
    MILLIS = "Millis"
    SECONDS = "Seconds"

    def as_call(self):
        return CallNode("Duration.of" + self.unit, [self.amount])

    def close_to(self, amount):
        return math.isclose(self.amount, amount, abs_tol=FLOAT_TOLERANCE)


STANDARD_CHARSETS = {
    "US-ASCII": "US_ASCII",
    "ISO-8859-1": "ISO_8859_1",
    "UTF-8": "UTF_8",
    "UTF-16": "UTF_16",
    "UTF-16BE": "UTF_16BE",
    "UTF-16LE": "UTF_16LE",
}


class Charset(namedtuple("Charset", ["name"])):
    """
    Encoding passed as java.nio.charset.Charset, constants are used for standard ones
    """

    def as_argument(self):
        constant = STANDARD_CHARSETS.get(self.name.upper())
        if constant:
            return Symbol("StandardCharsets." + constant)
        return CallNode("Charset.forName", [self.name])


class _ParamValue(object):
    """
    Values of different kinds never compare equal, even holding the same thing
    """
    __slots__ = ()

    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = tuple.__hash__


class Literal(_ParamValue, namedtuple("Literal", ["value"])):
    pass


class UnsupportedExpression(_ParamValue, namedtuple("UnsupportedExpression", ["raw_text"])):
    pass


class EqualsDefault(_ParamValue, namedtuple("EqualsDefault", ["value"])):
    """
    Value matching declared default, kept to allow emitting it when it can't be omitted
    """
    pass


def _parse_int(raw):
    if isinstance(raw, bool):
        raise ValueError("boolean is not a number")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError("fractional value")
        return int(raw)
    return int(str(raw).strip())


def _parse_float(raw):
    if isinstance(raw, bool):
        raise ValueError("boolean is not a number")
    return float(str(raw).strip())


def _parse_bool(raw):
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text == "true":
        return True
    elif text == "false":
        return False
    raise ValueError("expected true or false")


def _parse_string(raw):
    if isinstance(raw, bool):
        return "true" if raw else "false"
    return str(raw)


def _parse_charset(raw):
    name = str(raw).strip()
    if not name:
        raise ValueError("empty charset name")
    return Charset(name)


def _parse_amount(raw):
    amount = _parse_float(raw)
    if amount.is_integer():
        return int(amount)
    return amount


class ParamType(object):
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    DURATION_MILLIS = "duration-millis"
    DURATION_SECONDS = "duration-seconds"
    CHARSET = "charset"

    PARSERS = {
        INT: _parse_int,
        LONG: _parse_int,
        FLOAT: _parse_float,
        BOOL: _parse_bool,
        STRING: _parse_string,
        DURATION_MILLIS: lambda raw: Duration(_parse_amount(raw), Duration.MILLIS),
        DURATION_SECONDS: lambda raw: Duration(_parse_amount(raw), Duration.SECONDS),
        CHARSET: _parse_charset,
    }

    NUMERIC = (INT, LONG, FLOAT, DURATION_MILLIS, DURATION_SECONDS)


class ParamSpec(object):
    """
    Declares how one element property maps to a builder parameter

    :param name: element property name
    :param default: value builder assumes when parameter is omitted, None means there is no default
    :param noop: value which makes element to have no effect
    """

    def __init__(self, name, param_type=ParamType.STRING, default=None, noop=None):
        if param_type not in ParamType.PARSERS:
            raise ValueError("Unknown parameter type: %s" % param_type)
        self.name = name
        self.param_type = param_type
        self.default = default
        self.noop = noop

    @property
    def has_default(self):
        return self.default is not None

    def parse(self, raw_value, path=None):
        try:
            return ParamType.PARSERS[self.param_type](raw_value)
        except (ValueError, TypeError) as exc:
            raise MalformedPropertyError(self.name, raw_value, self.param_type, path, reason=str(exc))

    def matches(self, value, expected):
        """
        Compare parsed value with a declared one: numeric tolerance for floats and durations
        """
        if expected is None:
            return False
        if isinstance(value, Duration):
            return value.close_to(expected)
        if self.param_type == ParamType.FLOAT:
            return math.isclose(value, expected, abs_tol=FLOAT_TOLERANCE)
        return value == expected and type(value) == type(expected)

    def is_noop(self, param_value):
        if self.noop is None or isinstance(param_value, UnsupportedExpression):
            return False
        return self.matches(param_value.value, self.noop)

    def __repr__(self):
        return "%s(%s)" % (self.name, self.param_type)


def extract(raw_value, spec, path=None):
    """
    Classify raw property value against parameter spec

    :type spec: ParamSpec
    :param path: node path to report in errors
    :rtype: Literal|UnsupportedExpression|EqualsDefault
    :raise MalformedPropertyError: when value can't be parsed as declared type
    """
    absent = raw_value is None or (spec.param_type != ParamType.STRING and is_blank(raw_value))
    if absent:
        if spec.has_default:
            return EqualsDefault(spec.parse(spec.default, path))
        raise MalformedPropertyError(spec.name, raw_value, spec.param_type, path, reason="value is missing")

    if has_expression(raw_value):
        return UnsupportedExpression(raw_value)

    value = spec.parse(raw_value, path)
    if spec.matches(value, spec.default):
        return EqualsDefault(value)
    return Literal(value)


def prune_defaults(values, min_args=0):
    """
    Drop trailing run of default-valued parameters, keeping at least `min_args` of them.
    Defaults are positional, so a default followed by non-default value stays.

    :type values: list
    :rtype: list
    """
    end = len(values)
    while end > min_args and isinstance(values[end - 1], EqualsDefault):
        end -= 1
    return list(values[:end])


def as_argument(value):
    """
    Parsed value to call argument
    """
    if isinstance(value, Duration):
        return value.as_call()
    if isinstance(value, Charset):
        return value.as_argument()
    return value
