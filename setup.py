#!/usr/bin/env python

from setuptools import find_packages, setup

install_requires = [
    "fastapi>=0.110",
    "httpx>=0.27",
    "pydantic>=2.5",
    "PyYAML>=6.0.1",
    "structlog>=24.1",
    "uvicorn>=0.29",
]

tests_requires = [
    "freezegun>=1.4",
    "pytest>=7.1.2",
    "respx>=0.21",
]

setup(
    name="order-desk",
    version="0.1.0",
    author="OpenNode Team",
    author_email="info@opennodecloud.com",
    license="MIT",
    description="Order creation service backed by a user directory and a mailer.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    install_requires=install_requires,
    tests_require=tests_requires,
    extras_require={
        "test": tests_requires,
        "sentry": ["sentry-sdk>=1.40"],
    },
    packages=find_packages(include=["order_desk", "order_desk.*"]),
    entry_points={
        "console_scripts": [
            "order-desk=order_desk.main:main",
        ],
    },
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
