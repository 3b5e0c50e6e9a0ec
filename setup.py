#!/usr/bin/env python

from setuptools import find_packages, setup

setup(
    name="obozy",
    version="1.0.0",
    description="A web application to run registrations for scouting summer camps",
    author="Obozy maintainers",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    include_package_data=True,
    package_data={
        "obozy": [
            "portal_defaults.yaml",
            "templates/*.html",
            "templates/*/*.html",
            "templates/*/*/*.html",
        ],
    },
    python_requires=">=3.10",
    install_requires=[
        "Django>=5.1",
        "django-bootstrap4",
        "sentry-sdk",
        "boto3",
        "botocore",
        "pandas",
        "openpyxl",
        "PyYAML",
        "haikunator",
        "pymemcache",
    ],
    extras_require={
        "mysql": ["mysqlclient"],
        "test": ["pytest", "pytest-django"],
    },
    license="MIT License"
)
