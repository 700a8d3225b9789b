from glob import glob
from setuptools import setup


setup(
    name='fincalc',
    version='0.1.0',
    description='RPN financial calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['fincalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.6',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
