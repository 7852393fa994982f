from setuptools import setup, find_packages

setup(
    name="securepass",
    version="0.1.0",
    packages=find_packages(include=["securepass", "securepass.*"]),
    python_requires=">=3.12",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.29",
        "pydantic>=2.5",
        "pydantic-settings>=2.2",
        "cryptography>=42.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "httpx>=0.27",
        ],
    },
)
