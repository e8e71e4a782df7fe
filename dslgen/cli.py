"""
Console and file logging for command line tools

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
import sys
from logging import Formatter

from colorlog import ColoredFormatter

from dslgen import DslGenException, DslGenConfigError, DslGenInternalException, GenerationError
from dslgen.utils import get_stacktrace


class CLI(object):
    """
    Logging setup and error reporting shared by command line entry points

    :param options: OptionParser parsed parameters
    """
    console_handler = logging.StreamHandler(sys.stdout)

    def __init__(self, options):
        self.options = options
        self.setup_logging(options)
        self.log = logging.getLogger('')
        self.exit_code = 0

    @staticmethod
    def setup_logging(options):
        """
        Setting up console and file logging, colored if possible

        :param options: OptionParser parsed options
        """
        colors = {
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'bold_red',
        }
        fmt_file = Formatter("[%(asctime)s %(levelname)s %(name)s] %(message)s")
        if sys.stdout and sys.stdout.isatty():
            fmt_verbose = ColoredFormatter("%(log_color)s[%(asctime)s %(levelname)s %(name)s] %(message)s",
                                           log_colors=colors)
            fmt_regular = ColoredFormatter("%(log_color)s%(asctime)s %(levelname)s: %(message)s",
                                           "%H:%M:%S", log_colors=colors)
        else:
            fmt_verbose = Formatter("[%(asctime)s %(levelname)s %(name)s] %(message)s")
            fmt_regular = Formatter("%(asctime)s %(levelname)s: %(message)s", "%H:%M:%S")

        logger = logging.getLogger('')
        logger.setLevel(logging.DEBUG)

        if options.log:
            file_handler = logging.FileHandler(options.log, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(fmt_file)
            logger.addHandler(file_handler)

        if options.verbose:
            CLI.console_handler.setLevel(logging.DEBUG)
            CLI.console_handler.setFormatter(fmt_verbose)
        elif options.quiet:
            CLI.console_handler.setLevel(logging.WARNING)
            CLI.console_handler.setFormatter(fmt_regular)
        else:
            CLI.console_handler.setLevel(logging.INFO)
            CLI.console_handler.setFormatter(fmt_regular)

        if CLI.console_handler not in logger.handlers:
            logger.addHandler(CLI.console_handler)

    def close_log(self):
        """
        Close log handlers
        :return:
        """
        if self.options.log:
            for handler in self.log.handlers[:]:
                if issubclass(handler.__class__, logging.FileHandler):
                    self.log.debug("Closing log handler: %s", handler.baseFilename)
                    handler.close()
                    self.log.handlers.remove(handler)

    def handle_exception(self, exc):
        """
        Only first exception goes to the screen, details always go to debug log
        """
        level = logging.DEBUG
        if not self.exit_code:
            level = logging.ERROR
            self.exit_code = 1

        if isinstance(exc, KeyboardInterrupt):
            self.log.log(level, "Keyboard interrupt")
        elif isinstance(exc, DslGenConfigError):
            self.log.log(level, "Config Error: %s", exc)
        elif isinstance(exc, GenerationError):
            self.log.log(level, "Generation Error: %s", exc)
        elif isinstance(exc, DslGenInternalException):
            self.log.log(level, "Internal Error: %s", exc)
        elif isinstance(exc, DslGenException):
            self.log.log(level, "Generic Error: %s", exc)
        else:
            self.log.log(level, "%s: %s", type(exc).__name__, exc)

        self.log.debug("%s: %s\n%s", type(exc).__name__, exc, get_stacktrace(exc))
