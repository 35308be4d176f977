# setup.py
from pathlib import Path
from setuptools import setup, find_packages

README = Path(__file__).with_name("README.md").read_text(encoding="utf-8")

setup(
    name="gaze-analysis",
    version="0.1.0",
    description="Eye-gaze preprocessing, I-DT / I-VT fixation detection and AOI analytics",
    long_description=README,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(include=("gaze_analysis", "gaze_analysis.*")),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.21",
        "pandas>=1.3",
        "joblib>=1.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "gaze-analysis=gaze_analysis.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
