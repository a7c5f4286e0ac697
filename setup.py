from setuptools import setup, find_packages

setup(
    name="draft2html",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "marko>=2.0.0",
        "python-frontmatter>=1.0.0",
        "PyYAML",
        "Pillow",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'draft2html=draft2html.cli:main',
        ],
    },
    author="draft2html Contributors",
    description="Convert Draft.js rich-text content to HTML",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.9',
)
