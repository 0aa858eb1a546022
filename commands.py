import os
import sys

from setuptools import Command


class Test(Command):
    """
    Runs the test suite with pytest. Add to the build process using::
        setup(cmdclass={'test': Test})
    """

    description = "run unit tests with pytest"

    user_options = [
        ('pytest-args=', 'a', 'arguments to pass to pytest'),
        ('seed=', None, 'random seed used by the sampling tests'),
    ]

    def initialize_options(self):
        self.pytest_args = ''
        self.seed = None

    def finalize_options(self):
        if self.seed is not None:
            self.seed = int(self.seed)

    def run(self):
        import pytest

        if self.seed is not None:
            os.environ['ORDMAP_TEST_SEED'] = str(self.seed)
        errno = pytest.main(self.pytest_args.split())
        sys.exit(errno)
