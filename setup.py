from setuptools import setup, find_packages


setup(
    name="bitplanner",
    version="0.1.0",
    package_dir={"": "src"},
    description="Greedy state-space search over bit-encoded planning problems",
    license="MIT",
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "rich",
        "rich-click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "bitplanner=bitplanner.cli:main",
        ],
    },
)
