#-*- coding: utf-8 -*-
from setuptools import setup, find_packages
from os import path


def read(filename, encoding="utf-8"):
    here = path.abspath(path.dirname(__file__))
    with open(path.join(here, filename), encoding=encoding) as f:
        return f.read()


setup(
    name="Condi",
    version=read("condi/VERSION").strip(),

    description="Request-scoped predicates and synonyms for web "
                "controllers and their templates.",
    long_description=read("DESCRIPTION.rst"),

    author="Condi contributors",

    license="MIT",

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Internet",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Internet :: WWW/HTTP :: WSGI",
    ],

    keywords="web controller predicate view helper werkzeug",

    packages=find_packages(exclude=["test*", "examples*"]),

    package_data={
        'condi': ['VERSION'],
    },

    python_requires=">=3.8",

    install_requires=['werkzeug>=2.3'],
    extras_require={
        'jinja': ['jinja2'],
        'test': ['pytest', 'jinja2'],
    },

)
