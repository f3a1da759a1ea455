import codecs
import os
import re

from setuptools import setup


def open_local(paths: list, mode='r', encoding='utf-8'):
    path = os.path.join(
        os.path.abspath(os.path.dirname(__file__)),
        *paths
    )
    return codecs.open(path, mode, encoding)


with open_local(['README.md']) as f:
    long_description = f.read()

with open_local(['dictclient', '__init__.py']) as fp:
    try:
        version = re.findall(r"^__version__ = '([^']+)'\r?$",
                             fp.read(), re.M)[0]
    except IndexError:
        raise RuntimeError('Unable to determine version.')

setup(
    name='dictclient',
    version=version,
    packages=['dictclient', 'dictclient.net'],
    zip_safe=True,
    license='MIT',
    description='A synchronous client for DICT (RFC 2229) dictionary servers.',
    keywords='dict rfc2229 dictionary client protocol',
    long_description=long_description,
    long_description_content_type='text/markdown',
    install_requires=[
        'rwlock'
    ],
    extras_require={
        'test': ['pytest']
    },
    platforms='any',
    python_requires=">=3.5",
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Topic :: Internet',
        'Topic :: Text Processing :: Linguistic',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Programming Language :: Python :: 3',
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: Microsoft :: Windows',
        'Operating System :: POSIX :: Linux',
        'Natural Language :: English'
    ]
)
