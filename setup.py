from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="moac-toolkit",
    version="0.1.0",
    author="Your Name",
    description="A toolkit for signing and sending MOAC, ERC20, ERC721 and Fingate transactions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/moac-toolkit",
    packages=find_packages(exclude=["tests", "results", "venv"]),
    package_data={"moac_toolkit": ["abis.json"]},
    python_requires=">=3.8",
    install_requires=[
        "web3>=6.0.0",
        "python-dotenv>=1.0.0",
        "mnemonic>=0.20",
        "eth-account>=0.9.0",
        "eth-abi>=4.0.0",
        "eth-utils>=2.0.0",
        "eth-keys>=0.4.0",
        "rlp>=3.0.0",
        "base58>=2.1.0",
        "requests>=2.28.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "moac-toolkit=moac_toolkit.cli.main:main",
        ],
    },
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
