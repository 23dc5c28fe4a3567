from setuptools import setup
import os

VERSION = "0.1"


def get_long_description():
    with open(
        os.path.join(os.path.dirname(os.path.abspath(__file__)), "README.md"),
        encoding="utf8",
    ) as fp:
        return fp.read()


setup(
    name="datasette-wikisearch",
    description="Crawl a wiki, build a positional inverted index over it and search it from Datasette.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="Apache License, Version 2.0",
    classifiers=[
        "Framework :: Datasette",
        "License :: OSI Approved :: Apache Software License"
    ],
    version=VERSION,
    packages=["datasette_wikisearch", "datasette_wikisearch.plugins"],
    entry_points={
        "datasette": ["wikisearch = datasette_wikisearch"],
        "console_scripts": ["wikisearch = datasette_wikisearch.cli:main"],
    },
    install_requires=["datasette<1.0", "selectolax<1.0", "pluggy", "httpx", "zstandard", "more-itertools", "snowballstemmer", "uvicorn"],
    extras_require={"test": ["wheel", "pytest", "pytest-asyncio", "pytest-watch", "coverage"]},
    python_requires=">=3.7",
)
