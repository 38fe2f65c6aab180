from setuptools import setup, find_packages

setup(
    name="lisp2c",
    version="0.1.0",
    description="lisp2c — compile prefix call expressions to C-like infix calls",
    packages=find_packages(include=["lisp2c", "lisp2c.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.82",
        ],
    },
    entry_points={
        "console_scripts": [
            "lisp2c=lisp2c.cli:main",
        ],
    },
)
