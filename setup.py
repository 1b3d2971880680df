# -*- coding: utf-8 -*-
import codecs
from setuptools import setup, find_packages


tests_require = [
    'pytest>=7.0',
    'requests-mock>=1.9',
]

setup(
    name='Flask-RestMapper',
    version='0.1.0',
    packages=find_packages(exclude=['*tests*', 'examples']),
    license='MIT',
    description='Map remote REST resources to Python objects from Flask applications',
    long_description=codecs.open('README.rst', encoding='utf-8').read(),
    tests_require=tests_require,
    install_requires=[
        'Flask>=2.2',
        'jsonschema>=3.0',
        'aniso8601>=0.84',
        'blinker>=1.3',
        'requests>=2.20',
        'rfc3987',
        'rfc3339-validator',
    ],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ],
    zip_safe=False,
    extras_require={
        'docs': ['sphinx'],
        'tests': tests_require,
    }
)
