import os

import setuptools

dir_name = os.path.abspath(os.path.dirname(__file__))

version_contents = {}
with open(os.path.join(dir_name, "src", "lrukit", "version.py"), encoding="utf-8") as f:
    exec(f.read(), version_contents)

with open(os.path.join(dir_name, "README.md"), "r", encoding="utf-8") as f:
    long_description = f.read()

install_requires = [
    "python-dotenv",
    "tqdm",
    "typing_extensions>=4.1.0",
]

extras_require = {
    "dev": [
        "black",
        "build",
        "flake8",
        "flake8-isort",
        "isort==5.12.0",
        "pre-commit",
        "pytest",
        "twine",
        "nox",
    ],
    "test": ["pytest"],
}

extras_require["all"] = sorted({package for packages in extras_require.values() for package in packages})

setuptools.setup(
    name="lrukit",
    version=version_contents["VERSION"],
    description="A bounded least-recently-used cache with O(1) get and put",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    package_data={"lrukit": ["py.typed"]},
    python_requires=">=3.8.0",
    entry_points={"console_scripts": ["lrukit = lrukit.cli.__main__:main"]},
    install_requires=install_requires,
    extras_require=extras_require,
)
