from setuptools import setup, find_namespace_packages
from pathlib import Path

# Load README.md as long description (if present)
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

setup(
    name="cinelaunch",
    version="0.1.0",
    description="Personal video-link library: local catalog, language/genre taxonomy and pull-based multi-device sync.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",

    # Packages (sin __init__.py: paquetes namespace)
    packages=find_namespace_packages(include=["cinelaunch", "cinelaunch.*", "frontend", "frontend.*"]),
    py_modules=["dashboard"],
    include_package_data=True,

    # Runtime dependencies
    install_requires=[
        "python-dotenv",
        "requests",
        "pandas",
        "streamlit>=1.37",
        "altair",
        "streamlit-aggrid",
        "openai",
    ],

    # Optional dependencies (developer tools, etc.)
    extras_require={
        "dev": [
            "black",
            "mypy",
            "pyright",
            "pytest",
            "ruff",
        ],
    },

    # Entry points
    entry_points={
        "console_scripts": [
            # Menú interactivo o comandos list / pull / export / open
            "cinelaunch=cinelaunch.cli:main",
        ]
    },

    python_requires=">=3.10",

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Environment :: Web Environment",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Topic :: Multimedia :: Video",
        "Topic :: Utilities",
    ],

    keywords="video library catalog sync streamlit",
)
