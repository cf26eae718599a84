#!/usr/bin/env python
from setuptools import setup
setup(
    name='remotedocs',
    version='1.0',
    description='schema-less resources for a remote document service',
    author='remotedocs contributors',
    url='https://example.com/remotedocs/',

    packages=['remotedocs'],
    provides=['remotedocs'],
    python_requires='>=3.6',
    install_requires=['httplib2>=0.4.0'],
    extras_require={
        'test': ['mock', 'pytest'],
    },
)
