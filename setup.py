from setuptools import setup, find_packages

setup(
    name="up-cloudevent",
    version="0.1.0",
    description="Validation and serialization of uProtocol CloudEvents",
    packages=find_packages(include=["up_cloudevent", "up_cloudevent.*"]),
    install_requires=[
        "protobuf>=4.25",  # For the CloudEvents protobuf format
        "opentelemetry-api>=1.20",  # For tracing and metrics
    ],
    extras_require={
        "test": [
            "pytest",
            "opentelemetry-sdk>=1.20,<1.42",  # In-memory span exporter in tests
        ],
    },
    entry_points={
        "console_scripts": [
            "cetool=up_cloudevent.tools.cetool:main",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
