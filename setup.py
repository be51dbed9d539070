from setuptools import setup, find_packages

setup(
    name="forge_backup",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "wcmatch==10.1"
    ],
    extras_require={
        "test": [
            "pytest>=8.0"
        ]
    },
    entry_points={
        "console_scripts": [
            "forge_backup=forge_backup.main:main",
        ],
    },
)
