"""
python -m build
twine upload dist/*
"""

from setuptools import setup, find_packages


def sanitizable_setup():
    with open("requirements.txt", "rt") as fp:
        install_requires = fp.read().strip().split("\n")

    version = "1.0.0"

    setup(
        name="sanitizable",
        packages=find_packages(exclude=["tests", "tests.*", "examples"]),
        version=version,
        license="MIT",
        description="sanitizable : allowlist-filtered model extraction and patching for Flask-SQLAlchemy",
        long_description=open("README.rst").read(),
        keywords=["SqlAlchemy", "Flask", "REST", "JSON", "sanitize", "PATCH"],
        python_requires=">=3.9, <4",
        install_requires=install_requires,
        classifiers=[
            "Development Status :: 3 - Alpha",
            "Intended Audience :: Developers",
            "Framework :: Flask",
            "Topic :: Software Development :: Libraries",
            "Environment :: Web Environment",
            "Programming Language :: Python :: 3.12",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.9",
        ],
        extras_require={"test": ["pytest>=7.0"]},
    )


sanitizable_setup()  # pragma: no cover
