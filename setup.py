from setuptools import setup
import sys
if sys.version_info < (3, 10):
    sys.exit('conninfo-parse requires at least Python version 3.10.\nYou are currently running this installation with\n\n{}'.format(sys.version))

setup(
    name = 'conninfo-parse',
    packages = [
        'conninfo_parse',
    ],
    entry_points = {
        'console_scripts': [
            'conninfo-parse = conninfo_parse.cli:cli',
        ],
    },
    version = '0.2.0',
    description = 'Parse a PostgreSQL conninfo string and output the result',
    url = 'https://github.com/okdana/conninfo-parse',
    keywords = [
        'postgres',
        'conninfo',
        'dsn',
    ],
    classifiers = [
        'Topic :: Database',
        'License :: OSI Approved :: MIT License',
        'Intended Audience :: System Administrators',
        'Intended Audience :: Information Technology',
        'Environment :: Console',
        'Development Status :: 4 - Beta'
    ],
    install_requires = [
        'packaging',
        'pydantic>=2',
        'PyYAML'
    ],
    extras_require = {
        'test': [
            'pytest',
        ],
    },
    python_requires=">=3.10",
)
