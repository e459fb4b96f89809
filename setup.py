from setuptools import setup, find_packages

setup(
    name="dtmf-goertzel",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.24.0",
        "scipy>=1.10.0",
        "soundfile>=0.12.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "dtmf=dtmf_goertzel.cli:run",
        ],
    },
    python_requires=">=3.9",
)
