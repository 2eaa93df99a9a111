from setuptools import setup, find_packages
import pathlib


here = pathlib.Path(__file__).parent.resolve()
long_description = (here / 'README.md').read_text(encoding='utf-8')

setup(
    name="soundchanger",
    version="0.1.0",
    description="Compile sound change rule notation and apply it to word forms",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(include=["soundchanger", "soundchanger.*"]),
    package_data={"soundchanger": ["config/*.py"]},
    python_requires=">=3.8",
    install_requires=['schema', 'click', 'pandas', 'pandera'],
    extras_require={
        'dev': ['pytest', 'pytest-cov', 'pylint', 'mypy'],
    },
    entry_points={
        'console_scripts': ['soundchanger=soundchanger.soundchanger:main'],
    },
)
