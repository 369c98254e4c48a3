"""Install signed-sessions package."""

from setuptools import setup, find_packages

setup(
    name='signed-sessions',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    scripts=['bin/signed-sessions'],
    python_requires='>=3.8',
    install_requires=[
        "click",
        "flask",
        "pyjwt>=2",
        "python-json-logger>=3.1",
        "redis>=4.1",
    ],
    extras_require={
        'test': [
            "mimesis",
            "pytest",
        ],
    },
    zip_safe=False
)
