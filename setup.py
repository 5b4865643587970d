# setup.py
from setuptools import setup, find_packages

setup(
    name="page_signals",
    version="0.1.0",
    description="Анализатор одной веб-страницы: CSR/SSR, SEO-метаданные, hreflang, JSON-LD",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"page_signals": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "click>=8.1",
        "Jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.4", "pytest-asyncio>=0.23"],
    },
    entry_points={
        "console_scripts": ["page-signals=page_signals.cli:cli"],
    },
    python_requires=">=3.11",
)
