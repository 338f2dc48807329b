"""Setup configuration for storefront-cart-service project."""

from setuptools import setup, find_packages

setup(
    name="storefront-cart-service",
    version="1.0.0",
    description="Storefront backend: read-only product catalog and file-backed shopping cart served with FastAPI",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["view_cart"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "httpx>=0.26.0",
        ],
    },
)
