from setuptools import setup, find_packages

setup(
    name="aws-auto-credentials",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "boto3>=1.26.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "aws-auto-credentials=autocreds.cli:main",
        ],
    },
    python_requires=">=3.8",
    description="Set up AWS profiles that refresh their own credentials via SSO or OIDC",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
