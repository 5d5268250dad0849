from setuptools import setup, find_packages

setup(
    name="qapp-gateway",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi>=0.104.1",
        "uvicorn>=0.24.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.3",
            "httpx>=0.25.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "qapp-gateway=qapp_gateway.main:cli",
        ],
    },
    python_requires=">=3.11",
)
