from setuptools import find_packages, setup


def read_requirements():
    with open("requirements.txt") as f:
        return f.read().splitlines()


setup(
    name="jiffy",
    version="1.6.2",
    description="Desktop-entry menu builder and cache for a fuzzy-finder app launcher",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.11",
    install_requires=read_requirements(),
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={"console_scripts": ["jiffy=jiffy.main:main"]},
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
)
