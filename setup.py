# setup.py
from setuptools import setup, find_packages

setup(
    name="mankai",
    version="0.1.0",
    description="A small interpreted S-expression language",
    packages=find_packages(include=["mankai", "mankai.*"]),
    package_data={"mankai": ["prelude/*.mk"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "mankai-repl=mankai.repl:main",
            "mankai-server=mankai.repl_server:main",
        ],
    },
    zip_safe=False,
)
