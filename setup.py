from setuptools import setup, find_packages

setup(
    name="cityjson-lod-codec",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "geopandas",
        "pandas",
        "numpy",
        "shapely",
        "pyyaml",
        "click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
