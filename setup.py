# setup.py
from setuptools import setup, find_packages

setup(
    name="klisp",
    version="0.3.0",
    description="A tree-walking evaluator for a small Lisp with first-class macros",
    packages=find_packages(include=["klisp", "klisp.*", "klisp_lsp", "klisp_lsp.*"]),
    package_data={"klisp": ["prelude/*.lisp"]},
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": [
            "klisp=klisp.repl:main",
            "klisp-ls=klisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
