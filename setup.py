from setuptools import find_packages, setup

setup(
    name="article-viewer",
    version="0.1.0",
    description="Browse a paginated, filterable article list and article details from the articles API",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "requests>=2.32.0",
        "beautifulsoup4>=4.12.0",
    ],
    extras_require={
        "dev": ["pytest>=8.2.0"],
    },
    entry_points={
        "console_scripts": [
            "article-viewer=article_viewer.cli:main",
        ]
    },
)
