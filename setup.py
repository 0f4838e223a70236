from os import path

from setuptools import setup

this_dir = path.abspath(path.dirname(__file__))
with open(path.join(this_dir, "README.md"), encoding="utf8") as f:
    long_description = f.read()

setup(
    name="SneakerCollection",
    description="SneakerCollection - REST API for managing users' sneaker collections",
    long_description=long_description,
    long_description_content_type="text/markdown",
    version="0.1.0",
    license="MIT",
    packages=[
        "sneakercollection",
        "sneakercollection.core",
        "sneakercollection.routes",
        "sneakercollection.services",
        "sneakercollection.test",
    ],
    package_data={
        "sneakercollection": ["py.typed"],
        "sneakercollection.core": ["py.typed"],
        "sneakercollection.test": ["py.typed"],
    },
    keywords=["sneakers", "rest", "sqlalchemy", "fastapi"],
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "pydantic>=2.5",
        "email-validator",
        "PyJWT>=2.0",
        "colorama",
        "httpx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Framework :: FastAPI",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
    ],
    entry_points={
        "console_scripts": [
            "sneakers = sneakercollection.command:console_main",
        ]
    },
)
