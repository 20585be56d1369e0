import io

from setuptools import find_packages
from setuptools import setup

with io.open("README.md", "rt", encoding="utf8") as f:
    readme = f.read()

tests_require = [
    "pytest",
    "pytest-cov",
    "pytest-mock",
    "pytest-click",
]

setup(
    name="kvlines",
    version="0.1.0",
    description="Encoder and decoder for line based key/value text.",
    long_description=readme,
    long_description_content_type="text/markdown",
    license="BSD",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    zip_safe=False,
    platforms="any",
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0",
        "inifile>=0.4.1",
        "Werkzeug",
    ],
    tests_require=tests_require,
    extras_require={
        "test": tests_require,
    },
    classifiers=[
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing",
    ],
    entry_points="""
        [console_scripts]
        kvlines=kvlines.cli:main
    """,
)
