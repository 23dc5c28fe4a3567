import sys


def pytest_configure(config):
    sys._called_from_test = True
    # datasette skips entry-point plugin loading under _called_from_test,
    # so register this installed plugin explicitly for the web API tests
    from datasette.plugins import pm
    pm.load_setuptools_entrypoints("datasette")


def pytest_unconfigure(config):
    del sys._called_from_test
