import os

from setuptools import find_packages, setup

# https://packaging.python.org/single_source_version/
base_dir = os.path.abspath(os.path.dirname(__file__))
about = {}
with open(os.path.join(base_dir, "stlio", "__about__.py"), "rb") as f:
    exec(f.read(), about)


setup(
    name="stlio",
    version=about["__version__"],
    author=about["__author__"],
    author_email=about["__author_email__"],
    packages=find_packages(include=["stlio", "stlio.*"]),
    description="Streaming encoders and decoders for ASCII and binary STL",
    long_description=open(os.path.join(base_dir, "README.md")).read(),
    long_description_content_type="text/markdown",
    url=about["__website__"],
    project_urls={
        "Code": about["__website__"],
        "Issue tracker": about["__website__"] + "/issues",
    },
    license="MIT",
    platforms="any",
    install_requires=["numpy", "rich"],
    python_requires=">=3.8",
    extras_require={"test": ["pytest"]},
    classifiers=[
        about["__status__"],
        about["__license__"],
        "Intended Audience :: Science/Research",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering",
    ],
)
