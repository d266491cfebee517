#!/usr/bin/env python

import os
from setuptools import setup, find_packages

work_dir = os.path.dirname(os.path.realpath(__file__))
mod_dir = os.path.join(work_dir, 'src', 'pubsub_sink')


def get_version():
    with open(os.path.join(mod_dir, '__init__.py')) as f:
        for line in f:
            if line.startswith('__version__'):
                return line.split('=')[1].strip().strip('"\'')
    raise RuntimeError('Unable to find __version__')


INSTALL_REQUIRES = [
    'google-cloud-pubsub>=2.13.0',
    'google-api-core>=2.10.0',
    'google-auth>=2.14.0',
    'grpcio>=1.51.0',
]

TESTS_REQUIRE = [
    'pytest',
    'pytest-asyncio',
]


setup(
    name='pubsub-sink',
    version=get_version(),
    description='Batching sink publishing partitioned record streams to Google Cloud Pub/Sub',
    license='Apache License 2.0',
    python_requires='>=3.8',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=INSTALL_REQUIRES,
    extras_require={
        'tests': TESTS_REQUIRE,
    },
)
