import os

from setuptools import setup, find_packages

with open(os.path.join(os.path.dirname(__file__), "readme.md"), "r") as fh:
    long_description = fh.read()

setup(
    name='ridegate',
    version='1.0.0',
    license='MIT',
    description='Session and ride queue gateway for a theme park ticketing system.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires='>=3.9',
    install_requires=[
        'aiohttp',
        'aiohttp-cors',
        'uvloop',
        'tortoise-orm',
        'marshmallow>=3.13',
        'marshmallow-jsonschema',
        'python-jose',
        'argon2-cffi',
        'sentry-sdk',
        'tzdata',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-aiohttp',
            'pytest-asyncio',
            'faker',
        ],
    },
    entry_points={
        'console_scripts': [
            'ridegate=ridegate.cli:run',
            'fakequeue=fakequeue.run:run',
        ],
    },
)
