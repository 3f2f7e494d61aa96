from setuptools import setup, find_packages

setup(
    name="dcdtraj",
    version="0.1.0",
    description="Random-access reader and repair tool for DCD molecular-dynamics trajectories",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy",
        "matplotlib",
        "pyyaml",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'dcdtraj=dcdtraj.cli:main',
        ],
    },
    python_requires=">=3.8",
)
