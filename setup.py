"""
Setup script for the validator agent
"""

from setuptools import setup, find_packages

# Read requirements from requirements.txt
def read_requirements():
    with open('requirements.txt', 'r') as f:
        return [line.strip() for line in f if line.strip() and not line.startswith('#')]

setup(
    name="validator-agent",
    version="1.0.0",
    description="Validator agent for home chain gated actions and cross-chain block attestations",
    long_description="Polls a home chain's consensus and reward contracts to submit due validator-set and reward-cycle transactions, and relays signed latest-block attestations for every chain registered in the block registry contract.",
    author="",
    author_email="",
    url="",
    packages=find_packages(include=['validator_agent', 'validator_agent.*']),
    package_data={
        'validator_agent': ['abi/*.json'],
    },
    include_package_data=True,
    py_modules=['validator_entry'],
    install_requires=read_requirements(),
    extras_require={
        'test': ['pytest>=7.4.0'],
    },
    entry_points={
        'console_scripts': [
            'validator-agent=validator_entry:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
)
