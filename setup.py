""" A setuptools-based setup module. """

from setuptools import setup, find_packages
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='cashflow-forecaster',  # Required

    # Versions should comply with PEP 440:
    # https://www.python.org/dev/peps/pep-0440/
    version='0.1.0',  # Required

    # A one-line description of what this project does.
    description='Daily cash flow forecasting with what-if decisions',

    # This is the same as the README.
    long_description=long_description,  # Optional
    long_description_content_type='text/markdown',  # Optional

    author='Christopher Scott',  # Optional

    # For a list of valid classifiers, see https://pypi.org/classifiers/
    classifiers=[  # Optional
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Financial and Insurance Industry',
        'Topic :: Office/Business :: Financial',
        'Topic :: Software Development :: Libraries',
        'License :: Other/Proprietary License',
        'Programming Language :: Python :: 3',
        'Natural Language :: English'
    ],

    keywords='finance forecasting cashflow budgeting',  # Optional

    packages=find_packages(exclude=['contrib', 'docs', 'tests', 'tests.*']),

    python_requires='>=3.8',

    # moneyed.l10n (money formatting) needs py-moneyed 1.0 or later,
    # which brings in babel.
    install_requires=[
        'py-moneyed>=1.2',
        'python-dateutil>=2.7.3',
    ],  # Optional

    extras_require={  # Optional
        'doc': ['sphinx'],
        'test': ['pytest']
    },

    # The default settings file ships with the package.
    package_data={  # Optional
        'cashflow_forecaster': ['data/*.json'],
    },

    entry_points={  # Optional
        'console_scripts': [
            'cashflow-forecaster=cashflow_forecaster.__main__:main',
        ],
    },
)
