from setuptools import setup, find_packages
import codecs
import os
from commands import Test


HERE = os.path.abspath(os.path.dirname(__file__))


def read(*parts):
    """
    Build an absolute path from *parts* and and return the contents of the
    resulting file.  Assume UTF-8 encoding.
    """
    with codecs.open(os.path.join(HERE, *parts), "rb", "utf-8") as f:
        return f.read()


def req_file(filename):
    with open(os.path.join(HERE, filename)) as f:
        content = f.readlines()
    return [x.strip() for x in content if x.strip()]


setup(
    name='ordmap',
    version='0.1.0',
    description='Insertion-ordered mapping with cached views, '
                'positional access, search and transformation helpers',
    long_description=read("README.rst"),
    keywords='ordered map dict collection',
    packages=find_packages(exclude=('*.tests', 'tests')),
    include_package_data=True,
    zip_safe=False,
    license='MIT',
    python_requires='>=3.8',
    install_requires=req_file('requirements.txt'),
    extras_require={
        'test': req_file('requirements-tests.txt'),
        'dev': req_file('requirements-dev.txt'),
    },
    cmdclass={
        'test': Test,
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
)
