# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="nestify",
    version="0.1.0",
    description="Propose a nested directory layout for TypeScript/JavaScript projects from their import graph",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["nestify", "nestify.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.22",
        "tree-sitter-typescript>=0.23",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'nestify=nestify.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
