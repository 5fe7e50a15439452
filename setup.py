import os

from setuptools import setup

# mypyc compilation is opt-in: QUADINT_MYPYC=1 pip install .
ext_modules = []
if os.environ.get("QUADINT_MYPYC") == "1":
    from mypyc.build import mypycify

    ext_modules = mypycify([
        "quadint/utils.py",
        "quadint/quad.py",
    ])

setup(
    name="quadint",
    version="0.1.0",
    packages=["quadint"],
    python_requires=">=3.9",
    install_requires=[
        "sympy>=1.13",
        'tomli>=1.1; python_version < "3.11"',
    ],
    extras_require={
        "test": ["pytest"],
        "mypyc": ["mypy"],
    },
    ext_modules=ext_modules,

    license="MIT",
)
