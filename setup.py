from setuptools import setup, find_packages

setup(
    name="j2c-tools",
    version="0.1.0",
    description="Flatten nested JSON into CSV, plus JSON and CSV validators",
    author="Your Name",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "typer>=0.9",
        "rich>=13.0",
        "structlog>=23.1",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv>=1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "j2c=j2c.cli:run"
        ]
    },
    python_requires=">=3.8",
    include_package_data=True,
)
