from setuptools import setup, find_packages
import pathlib

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / 'README.md').read_text(encoding='utf-8')

setup(
    name='numeric_field',
    version='0.1.0',
    description="A formatted number input field for Textual, with grouping, digit limits and bounds",
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 3 - Alpha',
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MPL 2 License",
        "Operating System :: OS Independent"
    ],
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.11, <4',
    install_requires=[
        "textual",
        "rich",
        "platformdirs",
        "json-store",
        "docopt-ng",
    ],
    extras_require={
        'test': [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        'console_scripts': [
            'numeric_field=numeric_field:main',
        ],
    },
)
