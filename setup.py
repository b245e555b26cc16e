import os
import re
import setuptools
from typing import List


def get_content(file: str) -> str:
    with open(file, "r", encoding="utf-8") as f:
        return f.read()


def get_version(package: str) -> str:
    path = os.path.join(package, "version.py")
    return re.search("__version__ = ['\"]([^'\"]+)['\"]", get_content(path)).group(1)


def get_packages(package: str) -> List[str]:
    return [
        directory
        for directory, subdirectories, filenames in os.walk(package)
        if os.path.exists(os.path.join(directory, "__init__.py"))
    ]


setuptools.setup(
    name="collab_client",
    version=get_version("collab_client"),
    packages=get_packages("collab_client"),
    description="Typed client library for the v4 REST API of the collaboration platform",
    long_description=get_content("README.md"),
    long_description_content_type="text/markdown",
    license="GPLv3",
    install_requires=[
        "pydantic>=2.5,<3.0",
        "pydantic-settings>=2.0,<3.0",
        "requests>=2.27.0,<3.0"
    ],
    extras_require={
        "full": [
            "ujson>=5.2,<6.0"
        ]
    },
    entry_points={
        "console_scripts": [
            "collab-client=collab_client.__main__:main"
        ]
    },
    project_urls={},
    python_requires=">=3.8",
    classifiers=[
        "Operating System :: OS Independent",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Topic :: Internet :: WWW/HTTP",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 3 - Alpha"
    ]
)
