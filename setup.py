from setuptools import setup, find_packages

setup(
    name="pagesift",
    version="1.0.0",
    description="Readable article extraction and page context building for HTML documents",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "beautifulsoup4>=4.10.0",
        "html2text>=2020.1.16",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'pagesift=pagesift.__main__:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
