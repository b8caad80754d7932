"""Install the pinspace accounts service."""

from setuptools import setup, find_packages

setup(
    name='pinspace-accounts',
    version='0.1.0',
    packages=find_packages(include=['pinspace', 'pinspace.*'],
                           exclude=['*tests*']),
    install_requires=[
        "bcrypt",
        "flask",
        "flask-sqlalchemy",
        "pyjwt",
        "pytz",
        "sqlalchemy",
        "werkzeug",
        "wtforms",
    ],
    extras_require={
        'test': ['pytest', 'pytest-mock'],
    },
    zip_safe=False
)
