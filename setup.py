# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="orgoutline",
    version="0.1.0",
    description="Convierte rutas de directorio (DN) en un esquema jerárquico indentado y viceversa",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["orgoutline*"]),
    package_data={
        "orgoutline.interface.locales": ["*.json"],
    },
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'orgoutline=orgoutline.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
