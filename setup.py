"""Setup script for the payment service."""

from setuptools import setup, find_packages

setup(
    name="payment_service",
    version="1.0.0",
    description="Payment processing with fraud screening, audit trail and retrying notifications",
    author="ML Roadmap Bootcamp",
    python_requires=">=3.9",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        line.strip()
        for line in open("requirements.txt")
        if line.strip() and not line.startswith("#") and not line.startswith("git+")
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
        "dev": [
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Financial and Insurance Industry",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
