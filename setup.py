from setuptools import find_packages, setup


extras_require = {}

extras_require["mongo"] = [
    'PyMongo>=4.6.3,<5.0',
]

extras_require["test"] = [
    'pytest>=7.4',
    *extras_require["mongo"],
]

extras_require["all"] = [
    *extras_require["mongo"],
]


setup(
    name='orgusers',
    version='0.3.0',
    packages=find_packages(exclude=['tests', 'tests.*', 'demo']),
    license='MIT',
    description='Lifecycle of organization user assignments over a document store',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    install_requires=[
        'python-dotenv>=1.0.0,<2.0'
    ],
    extras_require=extras_require,
    python_requires=">=3.10"
)
