#!/usr/bin/env python

if __name__ == '__main__':
    import io
    import re

    import setuptools

    with io.open('src/bytevector/__init__.py', encoding='utf-8') as stream:
        version = re.search(r"^__version__ = '([^']+)'", stream.read(), re.MULTILINE).group(1)

    setuptools.setup(
        name='bytevector',
        version=version,
        license='BSD-2-Clause',
        description='Contiguous growable arrays of fixed-size binary elements',
        author='Andrea Zoppi',
        package_dir={'': 'src'},
        packages=setuptools.find_packages('src'),
        python_requires='>=3.10',
        install_requires=[],
        extras_require={
            'testing': [
                'numpy',
                'pytest',
            ],
        },
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: BSD License',
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3',
            'Programming Language :: Python :: 3 :: Only',
            'Topic :: Software Development :: Libraries',
        ],
    )
