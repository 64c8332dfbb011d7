from setuptools import setup, find_packages

setup(
    name="khmersuggest",
    version="0.1.0",
    description="Roman → Khmer transliteration suggestion provider for input methods",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.8",
    install_requires=[
        "requests",
        "pyspellchecker",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "khmersuggest=khmersuggest.main:main",
        ],
    },
    package_data={
        "khmersuggest": [
            "resources/*",
        ],
    },
    include_package_data=True,
)
