#!/usr/bin/env python

from setuptools import find_packages, setup

version = __import__('knobunits').__version__

with open('README.rst') as readme_file:
    readme = readme_file.read()

with open('HISTORY.rst') as history_file:
    history = history_file.read()

requirements = [
]

yaml_requirements = [
    'PyYAML',
]

toml_requirements = [
    'tomli; python_version<"3.11"',
]

test_requirements = [
    'pytest',
    'pytest-mock',
] + yaml_requirements + toml_requirements

setup(
    name='knobunits',
    version=version,
    description="Parsers for human-written sizes and durations in configuration",
    long_description='\n\n'.join([readme, history]),
    long_description_content_type='text/x-rst',
    author="knobunits developers",
    url='https://github.com/knobunits/knobunits',
    packages=[i for i in find_packages() if i.startswith('knobunits')],
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        'yaml': yaml_requirements,
        'toml': toml_requirements,
        'test': test_requirements,
    },
    python_requires='>=3.7',
    license="Apache Software License 2.0",
    keywords='knobunits size duration config',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3',
    ],
    entry_points={
        'console_scripts': [
            'knobunits=knobunits.cli:main'
        ]
    },
)
