"""
Module for converting JMX test plans into jmeter-java-dsl code

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
import codecs
import logging
import os
import sys
from optparse import OptionParser

from dslgen import DslGenInternalException, VERSION
from dslgen.cli import CLI
from dslgen.codegen.generator import CodeGenerator
from dslgen.codegen.renderer import JavaDslRenderer
from dslgen.config import Configuration, SETTINGS, RENDERER
from dslgen.jmx import JMX


class Converter(object):
    """
    Loads JMX, generates call tree and renders it

    :type config: dslgen.config.Configuration
    """

    def __init__(self, log, config):
        self.log = log.getChild(self.__class__.__name__)
        self.config = config
        settings = config.get(SETTINGS)
        self.dialect = JMX(self.log, skip_disabled=settings.get("skip-disabled", True))
        self.generator = CodeGenerator(log=self.log.getChild(CodeGenerator.__name__))
        self.renderer = JavaDslRenderer(config.get(RENDERER))

    def convert(self, file_to_convert):
        """
        :type file_to_convert: str
        :rtype: str
        :raise dslgen.GenerationError: first error met while building the plan
        """
        self.dialect.load(file_to_convert)
        root = self.dialect.configuration_tree()
        self.log.debug("Generating code for %r", root)

        result = self.generator.generate(root)
        tree = result.unwrap()
        self.log.debug("Rendering %s calls", len(tree.calls()))
        return self.renderer.render(tree)


class JMX2DSL(object):
    """
    Controller
    """

    def __init__(self, options, file_name):
        self.options = options
        self.cli = CLI(options)
        self.log = logging.getLogger(self.__class__.__name__)
        self.src_file = file_name
        self.dst_file = ''
        self.converter = None

    def load_config(self):
        """
        :rtype: Configuration
        """
        config = Configuration.with_defaults(self.options.configs or [])
        if self.options.class_name:
            config.get(RENDERER)["class-name"] = self.options.class_name
        return config

    def process(self):
        """
        Process file
        :return:
        """
        self.log.info('Loading jmx file %s', self.src_file)
        self.src_file = os.path.abspath(os.path.expanduser(self.src_file))
        if not os.path.exists(self.src_file):
            raise DslGenInternalException("File does not exist: %s" % self.src_file)

        config = self.load_config()
        self.converter = Converter(self.log, config)
        try:
            source = self.converter.convert(self.src_file)
        except BaseException:
            self.log.error("Error while processing jmx file: %s", self.src_file)
            raise

        if self.options.file_name:
            self.dst_file = self.options.file_name
        else:
            class_name = config.get(RENDERER).get("class-name")
            self.dst_file = os.path.join(os.path.dirname(self.src_file), class_name + ".java")

        with codecs.open(self.dst_file, 'w', encoding='utf-8') as fds:
            fds.write(source)

        self.log.info("Done processing, result saved in %s", self.dst_file)

    def perform(self):
        """
        :return: exit code
        """
        try:
            self.process()
        except BaseException as exc:
            self.cli.handle_exception(exc)
        finally:
            self.cli.close_log()
        return self.cli.exit_code


def main():
    usage = "Usage: jmx2dsl [input jmx file] [options]"
    parser = OptionParser(usage=usage, prog="jmx2dsl", version=VERSION)
    parser.add_option('-v', '--verbose', action='store_true', default=False,
                      help="Prints all logging messages to console")
    parser.add_option('-o', '--out', dest="file_name",
                      help="Set output .java file name, by default class name + .java next to input file is used")
    parser.add_option('-c', '--config', action='append', dest='configs', default=[],
                      help="Additional YAML or JSON config file, can be used several times")
    parser.add_option('-n', '--class-name', dest='class_name', default=None,
                      help="Name of generated test class")
    parser.add_option('-q', '--quiet', action='store_true', default=False, dest='quiet',
                      help="Display only warnings and errors")
    parser.add_option('-l', '--log', action='store', default=False, help="Log file location")
    parsed_options, args = parser.parse_args()
    if len(args) > 0:
        tool = JMX2DSL(parsed_options, args[0])
        sys.exit(tool.perform())
    else:
        sys.stdout.write(usage + "\n")


if __name__ == "__main__":
    main()
