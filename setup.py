"""
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
from setuptools import setup

from dslgen import VERSION

with open('requirements.txt') as _f:
    requires = [line.strip() for line in _f if line.strip() and not line.startswith('#')]

setup(
    name="dslgen",
    version=VERSION,
    description='Converter of JMeter test plans into jmeter-java-dsl code',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='Apache 2.0',
    install_requires=requires,
    extras_require={
        'test': ['pytest'],
    },
    packages=['dslgen', 'dslgen.codegen', 'dslgen.codegen.builders'],
    entry_points={
        'console_scripts': [
            'jmx2dsl=dslgen.jmx2dsl:main',
        ],
    },
    include_package_data=True,
    package_data={
        "dslgen": ["resources/*.yml"],
    },

    classifiers=[
        'Development Status :: 4 - Beta',

        'Topic :: Software Development :: Code Generators',
        'Topic :: Software Development :: Testing',
        'Topic :: Software Development :: Testing :: Traffic Generation',

        'License :: OSI Approved :: Apache Software License',

        'Operating System :: Microsoft :: Windows',
        'Operating System :: MacOS',
        'Operating System :: POSIX :: Linux',

        'Programming Language :: Python :: 3.7',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
    ],
    python_requires='>=3.7',
)
