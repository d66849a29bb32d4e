# setup.py
from setuptools import setup, find_packages

setup(
    name="glisp",
    version="0.1.0",
    description="A small Lisp runtime: extensible reader, macro expander and tail-calling evaluator",
    packages=find_packages(include=["glisp", "glisp.*"]),
    package_data={"glisp": ["prelude/*.glisp"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
