from setuptools import setup


setup(
    name='str8ts',
    version='1.0.0',
    zip_safe=False,
    python_requires='>=3.11',
    packages=['str8ts', 'routes'],
    package_dir={'str8ts': 'str8ts', 'routes': 'routes'},
    py_modules=['main'],
    install_requires=[
        'fastapi',
        'uvicorn',
        'pydantic',
        'python-dotenv',
    ],
    extras_require={
        'test': ['pytest', 'httpx'],
    },
)
