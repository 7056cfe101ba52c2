import io

from setuptools import setup, find_packages


version = "0.1.0"

# Please update tox.ini when modifying dependency version requirements
install_requires = [
    "monero-serialize>=3.0.1",
    "pycryptodome",
]

dev_extras = [
    "pytest",
    "pep8",
    "tox",
    "aiounittest",
]


with io.open("README.md", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="salvium_glue",
    version=version,
    description="Salvium CLSAG / TCLSAG ring signatures",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Dusan Klinec",
    author_email="dusan.klinec@gmail.com",
    license='MIT',
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Security",
    ],
    packages=find_packages(),
    include_package_data=True,
    python_requires=">=3.6",
    install_requires=install_requires,
    extras_require={
        "dev": dev_extras,
    },
)
