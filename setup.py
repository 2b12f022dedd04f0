# setup.py
from setuptools import setup, find_packages

setup(
    name="brdatakit",
    version="0.1.0",
    description="Herramientas para servir, indexar y reparar los datos JSON de BR_Data",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Encuentra automáticamente 'brdatakit' dentro de src/
    python_requires=">=3.9",
    install_requires=[
        "Flask",       # Servidor HTTP de la API de estructura
        "flask-cors",  # CORS para el servidor de desarrollo del frontend
        "watchdog",    # Vigilancia de cambios en BR_Data
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'brdatakit=brdatakit.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
