from setuptools import setup, find_packages

setup(
    name="tactilebrush",
    version="0.1.0",
    description="Tactile Brush: straight haptic strokes to vibrotactile actuator schedules",
    author="Tactile Brush Contributors",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "torch>=1.12.0",
        "numpy>=1.21.0",
        "PyYAML>=6.0",
        "matplotlib>=3.5",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=3.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "tactilebrush=tactilebrush.cli:main",
        ],
    },
)
