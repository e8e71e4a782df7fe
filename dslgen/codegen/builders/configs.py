"""
Config elements and listeners

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
import ntpath
import posixpath

from dslgen.codegen.builders.base import CallBuilder
from dslgen.codegen.params import ParamSpec, ParamType, Literal
from dslgen.codegen.registry import BuilderDescriptor, OptionSpec, prop_is, prop_blank, prop_not_blank, all_of
from dslgen.model import GUICLASS

RESULT_COLLECTOR = "ResultCollector"
FILENAME = ParamSpec("filename")

DESCRIPTORS = [
    BuilderDescriptor("CSVDataSet", "csvDataSet", [FILENAME], options=[
        OptionSpec("delimiter", ParamSpec("delimiter", default=",")),
        OptionSpec("encoding", ParamSpec("fileEncoding", default="")),
        OptionSpec("variableNames", ParamSpec("variableNames", default="")),
        OptionSpec("ignoreFirstLine", ParamSpec("ignoreFirstLine", ParamType.BOOL, default=False), flag=True),
        OptionSpec("stopThreadOnEOF", ParamSpec("stopThread", ParamType.BOOL, default=False), flag=True),
    ], consumes=["quotedData", "recycle", "shareMode"]),
    BuilderDescriptor(RESULT_COLLECTOR, "jtlWriter", [FILENAME], applies=prop_not_blank(FILENAME.name),
                      consumes=["ResultCollector.error_logging"]),
    BuilderDescriptor(RESULT_COLLECTOR, "resultsTreeVisualizer",
                      applies=all_of(prop_blank(FILENAME.name), prop_is(GUICLASS, "ViewResultsFullVisualizer")),
                      consumes=[FILENAME.name, "ResultCollector.error_logging"]),
]


def split_path(path):
    """
    Directory and file name, both windows and posix separators are accepted
    """
    module = ntpath if "\\" in path else posixpath
    directory, filename = module.split(path)
    return directory or ".", filename


class ResultCollectorBuilder(CallBuilder):
    """
    jtlWriter takes directory and file name separately
    """
    ELEMENT_TYPES = (RESULT_COLLECTOR,)

    def build_args(self, node, descriptor, values, context):
        if descriptor.function_name != "jtlWriter":
            return super(ResultCollectorBuilder, self).build_args(node, descriptor, values, context)
        directory, filename = split_path(values[0].value)
        self.log.debug("Results of %s are written to %s in %s", context.path, filename, directory)
        return [Literal(directory), Literal(filename)]
