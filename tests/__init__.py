""" unit test """
import inspect
import logging
import os
import sys
from io import StringIO
from logging import Handler
from unittest.case import TestCase

from dslgen.cli import CLI
from dslgen.codegen.builders import default_registry
from dslgen.codegen.context import TraversalContext
from dslgen.model import ConfigurationNode
from dslgen.utils import run_once

ROOT_LOGGER = logging.getLogger("")


@run_once
def setup_test_logging():
    """ set up test logging for convenience in IDE """
    if not ROOT_LOGGER.handlers:
        CLI.log = ''  # means no log file will be created
        CLI.verbose = True
        CLI.quiet = False
        CLI.setup_logging(CLI)
    else:
        ROOT_LOGGER.debug("Already set up logging")


setup_test_logging()
ROOT_LOGGER.info("Bootstrapped test")


def __dir__():
    filename = inspect.getouterframes(inspect.currentframe())[1][1]
    return os.path.dirname(filename)


RESOURCES_DIR = os.path.join(__dir__(), 'resources') + os.path.sep


def node(element_type, children=(), **props):
    """
    Shorthand for building configuration trees in tests, dots in property names are passed via dict
    """
    return ConfigurationNode(element_type, props, children)


def plan(*children, **props):
    props.setdefault("testname", "Test Plan")
    return ConfigurationNode("TestPlan", props, children)


def thread_group(*children, **extra):
    props = {"testname": "Thread Group", "ThreadGroup.num_threads": "1", "LoopController.loops": "1"}
    props.update(extra)
    return ConfigurationNode("ThreadGroup", props, children)


def http_sampler(*children, **extra):
    props = {"testname": "HTTP Request", "HTTPSampler.domain": "localhost", "HTTPSampler.protocol": "http",
             "HTTPSampler.path": "/", "HTTPSampler.method": "GET", "HTTPSampler.follow_redirects": "true"}
    props.update(extra)
    return ConfigurationNode("HTTPSamplerProxy", props, children)


def root_context(root):
    return TraversalContext(default_registry()).descend(root)


class DslGenTestCase(TestCase):
    def setUp(self):
        self.captured_logger = None
        self.log_recorder = None
        self.log = ROOT_LOGGER
        self.log.setLevel(logging.DEBUG)

    def sniff_log(self, log=ROOT_LOGGER):
        if not self.captured_logger:
            self.log_recorder = RecordingHandler()
            self.captured_logger = log
            self.captured_logger.addHandler(self.log_recorder)

    def tearDown(self):
        exc, _, _ = sys.exc_info()
        if exc:
            ROOT_LOGGER.info("Test failed with %s", exc)
        if self.captured_logger:
            self.captured_logger.removeHandler(self.log_recorder)
            self.log_recorder.close()


class RecordingHandler(Handler):
    def __init__(self):
        super(RecordingHandler, self).__init__()
        self.info_buff = StringIO()
        self.err_buff = StringIO()
        self.debug_buff = StringIO()
        self.warn_buff = StringIO()

    def emit(self, record):
        """

        :type record: logging.LogRecord
        :return:
        """
        if record.levelno == logging.INFO:
            self.write_log(self.info_buff, record.msg, record.args)
        elif record.levelno == logging.ERROR:
            self.write_log(self.err_buff, record.msg, record.args)
        elif record.levelno == logging.WARNING:
            self.write_log(self.warn_buff, record.msg, record.args)
        elif record.levelno == logging.DEBUG:
            self.write_log(self.debug_buff, record.msg, record.args)

    def write_log(self, buff, str_template, args):
        str_template += "\n"
        if args:
            buff.write(str_template % args)
        else:
            buff.write(str_template)
