from setuptools import setup, find_packages

setup(
    name="followback",
    version="0.1",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pandas",
        "tqdm",
        "orjson",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "followback=followback.__main__:main",
        ],
    },
    python_requires=">=3.8",
)
