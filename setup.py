from setuptools import setup, find_packages

setup(
    name='inline-mod',
    version='0.1.0',
    description='Inline a multi-file Rust crate into a single source file or cargo script',
    py_modules=['inline_mod', 'inliner'],
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.11',
    install_requires=[
        'lark',
        'regex',
        'pydantic>=2',
        'pygments',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'inline-mod = inline_mod:main',
        ],
    },
)
