from setuptools import setup, find_packages

setup(
    name="vejoias-variantes",
    version="1.0.0",
    packages=find_packages(include=["variantes", "variantes.*"]),
    install_requires=[
        "django>=4.0",
        "djangorestframework",
        "python-decouple",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.11",
)
