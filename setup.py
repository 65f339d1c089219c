from setuptools import setup, find_packages

setup(
    name="argsmith",
    version="0.1.0",
    description="Command-line argument grammars, parsing, usage text and command dispatch.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "rich>=13",
        "pydantic>=2",
        "prompt_toolkit>=3",
        "python-json-logger>=3.1",
        "pyyaml>=6",
        "toml>=0.10",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "pytest-asyncio>=0.21",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
