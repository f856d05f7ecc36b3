import os
import re

from setuptools import find_packages, setup


def get_version():
    """
    read the version from the package without importing it (its dependencies may not be installed yet)
    """
    with open(os.path.join(os.path.dirname(__file__), 'src', 'chimbench', '__init__.py')) as fh:
        match = re.search(r"__version__\s*=\s*'([^']+)'", fh.read())
    return match.group(1)


VERSION = get_version()


TEST_REQS = [
    'coverage>=4.2',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'braceexpand>=0.1.2',
    'numpy>=1.13.1',
    'pandas>=1.1',
]


setup(
    name='chimbench',
    version='{}'.format(VERSION),
    package_dir={'': 'src'},
    packages=find_packages('src', exclude=['tests']),
    description='Benchmark of chimeric junction predictions against a reference set of junctions',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS,
    },
    tests_require=TEST_REQS,
    python_requires='>=3.6',
    test_suite='tests',
    entry_points={
        'console_scripts': [
            'chimbench = chimbench.main:main',
        ]
    },
)
