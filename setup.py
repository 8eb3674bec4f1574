from setuptools import setup, find_packages

setup(
    name='sfrfs',
    version='1.0.0',
    description='Spectral fault receptive fields: center-surround vibration indicators for rolling bearings.',
    author='Your Name',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.26',
        'pandas>=2.1',
        'scipy>=1.11'
    ],
    extras_require={
        'test': [
            'pytest>=7.4'
        ]
    },
    include_package_data=True,
    zip_safe=False
)
