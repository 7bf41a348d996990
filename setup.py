import re
import os.path

from setuptools import setup, find_packages


with open(
    os.path.join(os.path.dirname(__file__), 'gqlhooks', '__init__.py')
) as f:
    VERSION = re.match(r".*__version__ = '(.*?)'", f.read(), re.S).group(1)

with open(
    os.path.join(os.path.dirname(__file__), 'README.rst')
) as f:
    DESCRIPTION = f.read()

setup(
    name='gqlhooks',
    version=VERSION,
    description='Validation and transformation hooks for GraphQL '
                'schema directives',
    long_description=DESCRIPTION,
    long_description_content_type='text/x-rst',
    packages=find_packages(exclude=['test*', 'examples*']),
    include_package_data=True,
    license='BSD-3-Clause',
    python_requires='>=3.8',
    install_requires=[
        'graphql-core>=3.2,<3.3',
        'click>=8.0',
    ],
    extras_require={
        'metrics': ['prometheus-client'],
        'test': [
            'pytest',
            'pytest-asyncio',
            'faker',
            'prometheus-client',
        ],
    },
    entry_points={
        'console_scripts': ['gqlhooks = gqlhooks.cli:main'],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
