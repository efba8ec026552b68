import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="prune_dts",
    version="1.0.0",
    description="Prune TypeScript declaration rollups down to their public API surface",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Text Processing",
        "Intended Audience :: Developers",
    ],
    keywords="typescript declarations d.ts api rollup prune public surface",
    url="https://github.com/madlag/prune_dts",
    author="François Lagunas",
    author_email="francois.lagunas@gmail.com",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.12",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "prune_dts=prune_dts.prune_dts:prune_dts",
        ],
    },
    include_package_data=True,
    package_data={
        "prune_dts": ["templates/**/*.jinja2"],
    },
    zip_safe=False,
)
