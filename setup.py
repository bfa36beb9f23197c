# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="zettelforest",
    version="0.1.0",
    description="Identificadores Zettelkasten jerárquicos: parseo, bosque y compactación",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["zettelforest*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
