"""
Loading JMX test plans into configuration trees

Copyright 2015 BlazeMeter Inc.

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

from cssselect import GenericTranslator
from lxml import etree

from dslgen import DslGenInternalException
from dslgen.codegen.params import has_expression
from dslgen.model import ConfigurationNode, TESTNAME, GUICLASS, TESTCLASS

HASH_TREE = "hashTree"
ROOT_TAG = "jmeterTestPlan"
ATTRIBUTES = (TESTNAME, GUICLASS, TESTCLASS)
ENTRY_VALUE = "value"


def _int(text):
    return int(text.strip())


def _float(text):
    return float(text.strip())


def _bool(text):
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    elif lowered == "false":
        return False
    raise ValueError("not a boolean: %s" % text)


PROP_TYPES = {
    "stringProp": None,
    "boolProp": _bool,
    "intProp": _int,
    "longProp": _int,
    "doubleProp": _float,
    "floatProp": _float,
}


class JMX(object):
    """
    JMX file as a tree of configuration nodes

    :param skip_disabled: leave out elements disabled in JMeter GUI along with their subtrees
    """
    PLAN_SEL = ROOT_TAG + ">" + HASH_TREE

    def __init__(self, log=None, skip_disabled=True):
        if log is None:
            log = logging.getLogger("")
        self.log = log.getChild(self.__class__.__name__)
        self.skip_disabled = skip_disabled
        self.tree = None

    def load(self, original):
        """
        Load existing JMX file

        :param original: JMX file path
        :raise DslGenInternalException: in case of XML parsing error or wrong root element
        """
        try:
            self.tree = etree.ElementTree()
            self.tree.parse(original)
        except BaseException as exc:
            msg = "XML parsing failed for file %s: %s"
            raise DslGenInternalException(msg % (original, exc))

        if self.tree.getroot().tag != ROOT_TAG:
            raise DslGenInternalException("Bad jmx format: root element of %s is %s" %
                                          (original, self.tree.getroot().tag))

    def get(self, selector):
        """
        Returns tree elements by CSS selector

        :type selector: str
        :return:
        """
        expression = GenericTranslator().css_to_xpath(selector)
        nodes = self.tree.xpath(expression)
        return nodes

    def configuration_tree(self):
        """
        Test plan element with everything it holds

        :rtype: ConfigurationNode
        """
        if self.tree is None:
            raise DslGenInternalException("JMX is not loaded")

        containers = self.get(self.PLAN_SEL)
        if not containers:
            raise DslGenInternalException("Bad jmx format: no %s under %s" % (HASH_TREE, ROOT_TAG))

        nodes = self._convert_hash_tree(containers[0])
        if len(nodes) != 1:
            raise DslGenInternalException("Bad jmx format: expected single test plan, found %s" % len(nodes))
        return nodes[0]

    def _convert_hash_tree(self, hash_tree):
        """
        hashTree holds pairs: element followed by hashTree of its children
        """
        nodes = []
        elements = [child for child in hash_tree if isinstance(child.tag, str)]
        for index, element in enumerate(elements):
            if element.tag == HASH_TREE:
                continue

            subtree = None
            if index + 1 < len(elements) and elements[index + 1].tag == HASH_TREE:
                subtree = elements[index + 1]

            if self.skip_disabled and element.get("enabled") == "false":
                self.log.info("Removing disabled element: %s (%s)", element.tag, element.get(TESTNAME))
                continue

            nodes.append(self._convert_element(element, subtree))
        return nodes

    def _convert_element(self, element, subtree):
        props = {attr: element.get(attr) for attr in ATTRIBUTES if element.get(attr) is not None}
        entries = []
        self._collect_props(element, props, entries)
        children = self._convert_hash_tree(subtree) if subtree is not None else []
        self.log.debug("Loaded %s with %s properties and %s entries", element.tag, len(props), len(entries))
        return ConfigurationNode(element.tag, props, entries + children)

    def _collect_props(self, element, props, entries):
        """
        Element props are flattened into given dict, collection items go to entries
        """
        for prop in element:
            if not isinstance(prop.tag, str):
                continue
            elif prop.tag == "elementProp":
                self._collect_props(prop, props, entries)
            elif prop.tag == "collectionProp":
                entries.extend(self._collection_entries(prop))
            elif prop.tag in PROP_TYPES:
                props[self._prop_name(prop)] = self._prop_value(prop)
            else:
                self.log.debug("Skipping %s '%s' of %s", prop.tag, prop.get("name"), element.tag)

    def _collection_entries(self, collection):
        entries = []
        for item in collection:
            if not isinstance(item.tag, str):
                continue
            elif item.tag == "elementProp":
                props = {}
                nested = []
                self._collect_props(item, props, nested)
                entry_type = item.get("elementType") or collection.get("name")
                entries.append(ConfigurationNode(entry_type, props, nested))
            elif item.tag == "collectionProp":
                entries.append(ConfigurationNode(collection.get("name"), {}, self._collection_entries(item)))
            elif item.tag in PROP_TYPES:
                entries.append(ConfigurationNode(collection.get("name"), {ENTRY_VALUE: self._prop_value(item)}))
        return entries

    @staticmethod
    def _prop_name(prop):
        # doubleProp keeps its name in a child element
        return prop.get("name") or prop.findtext("name")

    def _prop_value(self, prop):
        """
        Typed value of prop, texts which can't be converted (e.g. holding expressions) are kept as is
        """
        text = prop.text
        if text is None:
            value_element = prop.find("value")
            text = value_element.text if value_element is not None else None
        if text is None:
            text = ""

        convert = PROP_TYPES[prop.tag]
        if convert is None or not text.strip() or has_expression(text):
            return text

        try:
            return convert(text)
        except ValueError:
            self.log.debug("Keeping %s '%s' as text: %r", prop.tag, self._prop_name(prop), text)
            return text
