from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="saucedemo-ui-tests",
    version="1.0.0",
    description="End-to-end UI regression suite for the SauceDemo storefront, with REST API smoke checks",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["saucedemo_tests", "saucedemo_tests.*"]),
    package_data={"saucedemo_tests": ["fixtures/*.json"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Testing",
        "Framework :: Pytest",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
)
