import os
import re

from setuptools import find_packages, setup


def get_version():
    with open(os.path.join(os.path.dirname(__file__), 'fusionfinder', '__init__.py')) as fh:
        return re.search(r"^__version__ = '([^']+)'", fh.read(), re.M).group(1)


VERSION = get_version()


def parse_md_readme():
    try:
        with open('README.md') as fh:
            return fh.read()
    except OSError:
        return ''


TEST_REQS = [
    'coverage>=4.2',
    'pycodestyle>=2.3.1',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'braceexpand>=0.1.2',
    'pandas>=1.1.0',
]

setup(
    name='fusionfinder',
    version='{}'.format(VERSION),
    packages=find_packages(exclude=['tests', 'tests.*']),
    description='Gene fusion candidates from chimeric read alignments',
    long_description=parse_md_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS,
    },
    python_requires='>=3.6',
    test_suite='tests',
    entry_points={
        'console_scripts': [
            'fusionfinder = fusionfinder.main:main',
        ]
    },
)
