# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="codexreport",
    version="1.0.0",
    description="Genera un documento <codex> con el árbol y el contenido de una lista de rutas",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["codexreport*"]),
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",  # Estimación de tokens (--tokens)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'codexreport=codexreport.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
