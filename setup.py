# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="archinspector",
    version="1.0.0",
    description="Project tree explorer with AI-generated architectural explanations",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["archinspector", "archinspector.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",
        "google-genai",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'archinspector=archinspector.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
