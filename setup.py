# -*- coding: utf-8 -*-

import os
from codecs import open
from typing import Dict

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))

# load the package's __version__.py module as a dictionary
about: Dict[str, str] = {}
with open(
    os.path.join(here, "rm_version_switcher", "__version__.py"), "r", "utf-8"
) as f:
    exec(f.read(), about)


def parse_requires(_list):
    requires = list()
    for require in _list:
        if require.startswith("#"):
            continue
        requires.append(require)
    requires = list(filter(None, requires))  # remove "" from list
    return requires


# test modules live beside the code they cover
packages = find_packages(exclude=("tests", "tests.*", "*.tests", "*.tests.*"))

with open(os.path.join(here, "testing.txt")) as f:
    testing = parse_requires(f.read().splitlines())

extras = {"testing": testing}

with open(os.path.join(here, "requirements.txt")) as f:
    requires = parse_requires(f.read().splitlines())

setup(
    name=about["__title__"],
    version=about["__version__"],
    description=about["__description__"],
    python_requires="~=3.9",
    license=about["__license__"],
    classifiers=[
        "Natural Language :: English",
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.9",
        "Intended Audience :: End Users/Desktop",
        "Operating System :: POSIX :: Linux",
        "Topic :: Utilities",
    ],
    packages=packages,
    include_package_data=True,
    install_requires=requires,
    extras_require=extras,
    entry_points={
        "console_scripts": [
            "rm-version-switcher=rm_version_switcher.cli.switcher:main",
        ],
    },
)
